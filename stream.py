"""Receive generated configurations one at a time."""
import json
import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field

from models import BuildComponent, MalformedComponentError, parse_configuration

logger = logging.getLogger(__name__)


@dataclass
class ConfigurationFeed:
    """Display list of generated builds, in arrival order.

    The generator may deliver the same build more than once; every
    transformation downstream is pure, so re-processing is harmless.
    """
    configurations: list[dict[str, BuildComponent]] = field(default_factory=list)
    rejected: int = 0

    def receive(self, event) -> int | None:
        """Append one event. Returns its index, or None if it was unusable."""
        try:
            config = parse_configuration(event)
        except MalformedComponentError as e:
            self.rejected += 1
            logger.warning(f"Dropping malformed configuration event: {e}")
            return None
        if not config:
            self.rejected += 1
            logger.debug("Dropping empty configuration event")
            return None
        self.configurations.append(config)
        return len(self.configurations) - 1

    def clear(self):
        self.configurations = []
        self.rejected = 0

    def __len__(self) -> int:
        return len(self.configurations)


def iter_events(path: str) -> Iterator[Mapping]:
    """Yield configuration events from a JSON-lines file.

    Blank lines are ignored; lines that are not valid JSON are logged and
    skipped.
    """
    with open(path, "r", encoding="utf-8") as f:
        for line_no, line in enumerate(f, 1):
            line = line.strip()
            if not line:
                continue
            try:
                yield json.loads(line)
            except json.JSONDecodeError as e:
                logger.warning(f"{path}:{line_no}: invalid JSON event: {e}")
