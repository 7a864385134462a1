"""File watcher that re-renders output whenever a KiCad file changes."""

import logging
import time
from pathlib import Path
from typing import Callable, Optional

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from .errors import KicadError

logger = logging.getLogger(__name__)


class LayoutFileHandler(FileSystemEventHandler):
    """Handles file system events for a single watched file."""

    def __init__(self, path: Path, render: Callable[[], None], update_interval: float = 1.0):
        self.path = Path(path).resolve()
        self.render = render
        self.update_interval = update_interval
        self.last_update = 0.0

        # Do initial render
        self.update()

    def _is_target(self, src: str) -> bool:
        return Path(src).resolve() == self.path

    def on_modified(self, event):
        """Handle file modification events."""
        if event.is_directory or not self._is_target(event.src_path):
            return
        self._changed()

    def on_moved(self, event):
        # Editors that save through a temporary file end with a rename onto the target.
        if event.is_directory or not self._is_target(event.dest_path):
            return
        self._changed()

    def _changed(self):
        now = time.monotonic()
        if now - self.last_update < self.update_interval:
            return
        logger.info(f"Detected change in {self.path.name}, updating output...")
        self.update()

    def update(self):
        """Run the render callback; failures are logged, not raised."""
        self.last_update = time.monotonic()
        try:
            self.render()
        except (KicadError, OSError, UnicodeDecodeError) as e:
            logger.error(f"Error updating output for {self.path.name}: {e}")


class LayoutWatcher:
    """Watches one .kicad_pcb or .kicad_sym file for changes."""

    def __init__(self, path: Path, render: Callable[[], None], update_interval: float = 1.0):
        self.path = Path(path)
        self.render = render
        self.update_interval = update_interval
        self._observer: Optional[Observer] = None

    def start(self) -> LayoutFileHandler:
        handler = LayoutFileHandler(self.path, self.render, self.update_interval)
        self._observer = Observer()
        self._observer.schedule(handler, str(self.path.resolve().parent), recursive=False)
        self._observer.start()
        return handler

    def stop(self):
        if self._observer is not None:
            self._observer.stop()
            self._observer.join()
            self._observer = None

    def run(self):
        """Start watching and block until interrupted."""
        self.start()
        try:
            while True:
                time.sleep(1)
        finally:
            self.stop()
