"""Calls of the "admin" namespace."""

from __future__ import annotations

import ipaddress
import json
from dataclasses import dataclass, field
from typing import Any, Mapping

from w3kit.rpc import CallFactory
from w3kit.util import HASH0, HASH_LENGTH, decode_data


def _as_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"cannot decode {value!r} as bool")
    return value


def _as_int(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"cannot decode {value!r} as int")
    return value


def _as_str(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError(f"cannot decode {value!r} as string")
    return value


def _as_hash(value: Any) -> bytes:
    raw = decode_data(_as_str(value))
    if len(raw) != HASH_LENGTH:
        raise ValueError(f"invalid hash {value!r}: must have {HASH_LENGTH} bytes")
    return raw


def _load_object(data: Any) -> Mapping[str, Any]:
    if isinstance(data, (str, bytes, bytearray)):
        data = json.loads(data)
    if not isinstance(data, Mapping):
        raise ValueError("expected a JSON object")
    return data


def add_peer(url: Any) -> CallFactory:
    """Add the peer with the given enode URL; returns whether it succeeded."""
    return CallFactory("admin_addPeer", [str(url)], ret_wrapper=_as_bool)


def remove_peer(url: Any) -> CallFactory:
    """Disconnect from the peer with the given enode URL."""
    return CallFactory("admin_removePeer", [str(url)], ret_wrapper=_as_bool)


def add_trusted_peer(url: Any) -> CallFactory:
    """Add the peer with the given enode URL to the trusted peers."""
    return CallFactory("admin_addTrustedPeer", [str(url)], ret_wrapper=_as_bool)


def remove_trusted_peer(url: Any) -> CallFactory:
    """Remove the peer with the given enode URL from the trusted peers."""
    return CallFactory("admin_removeTrustedPeer", [str(url)], ret_wrapper=_as_bool)


def node_info() -> CallFactory:
    """Request information about the running node."""
    return CallFactory("admin_nodeInfo", [], ret_wrapper=NodeInfoResponse.from_json)


@dataclass
class PortsInfo:
    """The node's discovery and listener ports."""

    discovery: int = 0
    listener: int = 0


@dataclass
class ProtocolInfo:
    """Chain information of one protocol the node runs."""

    difficulty: int | None = None
    genesis: bytes = HASH0
    head: bytes = HASH0
    network: int = 0


def _ports_from_json(data: Any) -> PortsInfo | None:
    if data is None:
        return None
    obj = _load_object(data)
    return PortsInfo(
        discovery=_as_int(obj.get("discovery", 0)),
        listener=_as_int(obj.get("listener", 0)),
    )


def _protocol_from_json(data: Any) -> ProtocolInfo | None:
    if data is None:
        return None
    obj = _load_object(data)
    difficulty = obj.get("difficulty")
    genesis = obj.get("genesis")
    head = obj.get("head")
    return ProtocolInfo(
        difficulty=None if difficulty is None else _as_int(difficulty),
        genesis=HASH0 if genesis is None else _as_hash(genesis),
        head=HASH0 if head is None else _as_hash(head),
        network=_as_int(obj.get("network", 0)),
    )


@dataclass
class NodeInfoResponse:
    """Information about a running node."""

    enode: str | None = None
    id: str = ""
    ip: ipaddress.IPv4Address | ipaddress.IPv6Address | None = None
    listen_addr: str = ""
    name: str = ""
    ports: PortsInfo | None = None
    protocols: dict[str, ProtocolInfo | None] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: Any) -> NodeInfoResponse:
        """Build the response from its JSON text or decoded JSON object."""
        obj = _load_object(data)
        enode = obj.get("enode")
        ip = obj.get("ip")
        return cls(
            enode=None if enode is None else _as_str(enode),
            id=_as_str(obj.get("id") or ""),
            ip=ipaddress.ip_address(_as_str(ip)) if ip else None,
            listen_addr=_as_str(obj.get("listenAddr") or ""),
            name=_as_str(obj.get("name") or ""),
            ports=_ports_from_json(obj.get("ports")),
            protocols={
                name: _protocol_from_json(info)
                for name, info in (obj.get("protocols") or {}).items()
            },
        )