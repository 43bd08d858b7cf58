"""WS-Discovery Probe envelope construction."""

from __future__ import annotations

from onvif_discover.identifiers import is_message_id

SOAP_ENV_NS = "http://www.w3.org/2003/05/soap-envelope"
WSA_NS = "http://schemas.xmlsoap.org/ws/2004/08/addressing"
WSD_NS = "http://schemas.xmlsoap.org/ws/2005/04/discovery"

PROBE_ACTION = f"{WSD_NS}/Probe"
DISCOVERY_TO = "urn:schemas-xmlsoap-org:ws:2005:04/discovery"


def build_probe(message_id: str) -> bytes:
    """Render a match-any Probe (empty Types and Scopes) addressed to the discovery URN."""

    if not is_message_id(message_id):
        raise ValueError(f"Invalid message id: {message_id!r}")

    body = f"""<?xml version="1.0" ?>
<s:Envelope xmlns:s="{SOAP_ENV_NS}">
	<s:Header xmlns:a="{WSA_NS}">
		<a:Action>{PROBE_ACTION}</a:Action>
		<a:MessageID>urn:uuid:{message_id}</a:MessageID>
		<a:To>{DISCOVERY_TO}</a:To>
	</s:Header>
	<s:Body>
		<d:Probe xmlns:d="{WSD_NS}">
			<d:Types />
			<d:Scopes />
		</d:Probe>
	</s:Body>
</s:Envelope>"""
    return body.encode("utf-8")
