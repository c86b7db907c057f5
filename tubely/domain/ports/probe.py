from __future__ import annotations
from pathlib import Path
from typing import List, Protocol
from tubely.domain.entities.probe import StreamDescriptor

class MediaProbePort(Protocol):
    # Raises tubely.domain.errors.ProbeFailure on any failure
    def probe(self, path: Path) -> List[StreamDescriptor]: ...
