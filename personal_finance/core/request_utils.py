"""Client address resolution for the login limiter."""

import ipaddress
import logging

from fastapi import Request

from personal_finance.core.config import settings

logger = logging.getLogger(__name__)


def _is_valid_ip(value: str) -> bool:
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True


def get_client_ip(request: Request) -> str | None:
    """Address login failures are counted against.

    The first ``X-Forwarded-For`` hop is used only when the connection
    comes from one of ``TRUSTED_PROXY_IPS``; from anyone else the header is
    ignored, otherwise a client could rotate it to dodge a block.
    """
    peer = request.client.host if request.client else None
    if peer is None or peer not in settings.trusted_proxy_ip_set:
        return peer

    forwarded = request.headers.get("X-Forwarded-For")
    if not forwarded:
        return peer

    first_hop = forwarded.split(",", 1)[0].strip()
    if _is_valid_ip(first_hop):
        return first_hop
    logger.warning(f"Ignoring malformed X-Forwarded-For from proxy {peer}: {forwarded!r}")
    return peer
