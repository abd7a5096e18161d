"""Forwarding table that exposes host widget properties on the panel."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from mdpanel.host import DisplayHost


@dataclass(frozen=True)
class ForwardedProperty:
    """Read and write one host property by name; never triggers a rebuild."""

    name: str
    host: DisplayHost

    def get(self):
        """Current host value."""
        return self.host.get_property(self.name)

    def set(self, value) -> None:
        """Write straight through to the host."""
        self.host.set_property(self.name, value)


def build_forwarding_table(host: DisplayHost, reserved: Iterable[str]) -> dict[str, ForwardedProperty]:
    """Snapshot the host's property set, skipping names the panel declares itself."""
    reserved = set(reserved)
    table: dict[str, ForwardedProperty] = {}
    for name in host.property_names():
        if name in reserved or name.startswith("_") or name in table:
            continue
        table[name] = ForwardedProperty(name, host)
    return table
