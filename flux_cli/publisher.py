"""Copy component templates into the host application's template directory."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import List, Optional, Set

from rich.console import Console

from .catalogue import template_path

logger = logging.getLogger(__name__)


class Publisher:
    def __init__(
        self,
        source_dir: Path,
        destination_dir: Path,
        pro_source_dir: Optional[Path] = None,
        force: bool = False,
        console: Optional[Console] = None,
    ) -> None:
        self.source_dir = source_dir
        self.pro_source_dir = pro_source_dir
        self.destination_dir = destination_dir
        self.force = force
        self.console = console or Console()
        self._written: Set[Path] = set()

    def publish_file(self, component: str, source: Path, destination: Path) -> Optional[Path]:
        """Copy one template, returning the destination or ``None`` when skipped.

        Files that existed before this run are only replaced with ``force``.
        A file written earlier in the same run is always replaced, so a pro
        variant copied after its free counterpart ends up at the destination.
        """
        destination.parent.mkdir(parents=True, exist_ok=True)

        if destination.exists() and not self.force and destination not in self._written:
            self.console.print(
                f"Skipping [{component}]. File already exists: {destination}",
                style="yellow",
                markup=False,
                soft_wrap=True,
            )
            return None

        shutil.copyfile(source, destination)
        self._written.add(destination)
        return destination

    def publish_component(self, component: str) -> List[Path]:
        relative = template_path(component)
        destination = self.destination_dir / relative

        published: List[Path] = []
        sources = [self.source_dir]
        if self.pro_source_dir is not None:
            sources.append(self.pro_source_dir)

        for source_dir in sources:
            source = source_dir / relative
            if not source.is_file():
                continue
            result = self.publish_file(component, source, destination)
            if result:
                self.console.print(f"Published: {result}", style="green", markup=False, soft_wrap=True)
                published.append(result)

        if not published:
            logger.debug("Nothing published for %s", component)
        return published

    def publish(self, components: List[str]) -> List[Path]:
        self.destination_dir.mkdir(parents=True, exist_ok=True)

        published: List[Path] = []
        for component in components:
            published.extend(self.publish_component(component))
        logger.info("Published %d files to %s", len(published), self.destination_dir)
        return published
