"""Environment for httplan - aggregates the ports used while loading."""

from __future__ import annotations

from dataclasses import dataclass

from httplan.kernel.ports import TransportPort
from httplan.kernel.trace import Trace


@dataclass
class Env:
    """Environment aggregation - combines all ports.

    The transport is owned by the caller; loading only sends requests
    through it and never closes it.
    """

    transport: TransportPort
    trace: Trace | None = None
