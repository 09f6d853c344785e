"""Snapshot session driver."""

import logging
import time
from pathlib import Path
from typing import Callable, List, Optional, Union

from ..config.settings import Settings, SNAPSHOT_EXTENSION
from ..igv.client import IGVClient, SocketTransport, Transport
from ..igv.commands import IGVCommands
from ..utils.exceptions import DriverError

logger = logging.getLogger(__name__)

TransportFactory = Callable[[str, int, Optional[float]], Transport]


def snapshot_filename(index: int, location: str) -> str:
    """
    Build the snapshot file name for a location.

    Args:
        index: 0-based position of the location in the run.
        location: Genomic location, e.g. chr1:100-200.

    Returns:
        Name such as 001_chr1_100-200.
    """
    return f"{index + 1:03d}_{location}".replace(":", "_")


def clear_snapshots(directory: Union[str, Path]) -> List[Path]:
    """
    Delete old snapshot images from a directory.

    Files that cannot be removed are logged and skipped.

    Args:
        directory: Snapshot directory.

    Returns:
        Paths that could not be deleted.

    Raises:
        DriverError: If the directory cannot be listed.
    """
    try:
        entries = sorted(Path(directory).iterdir())
    except OSError as e:
        raise DriverError(f"Could not list snapshot directory {directory}: {e}") from e

    failed: List[Path] = []
    for path in entries:
        if not path.name.endswith(SNAPSHOT_EXTENSION):
            continue
        try:
            path.unlink()
        except OSError as e:
            logger.warning(f"Could not delete {path}: {e}")
            failed.append(path)
    return failed


class SessionDriver:
    """Drives IGV through the snapshot script for one run."""

    def __init__(
        self,
        transport_factory: Optional[TransportFactory] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize session driver.

        Args:
            transport_factory: Opens the connection to IGV. Defaults to a TCP socket.
            sleep: Function used to wait between steps.
        """
        self.transport_factory = transport_factory or SocketTransport.connect
        self.sleep = sleep

    def run(self, settings: Settings) -> int:
        """
        Load the BAM files and snapshot every location.

        Args:
            settings: Validated run settings.

        Returns:
            Number of snapshots taken.

        Raises:
            DriverError: If the connection fails or IGV rejects a command.
        """
        logger.info(f"Opening a socket to IGV ({settings.igv_ip}:{settings.igv_port})...")
        with self.transport_factory(
            settings.igv_ip, settings.igv_port, settings.timeout
        ) as transport:
            logger.info("Connection established.")
            commands = IGVCommands(IGVClient(transport))

            # get a blank slate
            commands.new()

            for filename in settings.bam_files:
                commands.load(filename)

            commands.snapshot_directory(settings.snapshot_directory)
            logger.info(
                f"\nClearing all {SNAPSHOT_EXTENSION} files in {settings.snapshot_directory}/..."
            )
            failed = clear_snapshots(settings.get_snapshot_path())
            if failed:
                logger.warning(f"Cleared, but {len(failed)} file(s) could not be deleted.")
            else:
                logger.info("Cleared.")

            total = len(settings.locations)
            for i, location in enumerate(settings.locations):
                logger.info(f"\nLocation {i + 1} of {total}:")
                commands.goto(location)
                self.sleep(settings.delay)
                # collapsed display mode sticks once set
                if i == 0:
                    commands.collapse()
                commands.sort_base(location)
                self.sleep(settings.delay)
                commands.snapshot(snapshot_filename(i, location))
                self.sleep(settings.delay)

        logger.info(f"\nDone!  Wrote {total} snapshots to {settings.snapshot_directory}/.")
        return total
