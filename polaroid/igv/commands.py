"""IGV batch command implementations."""

from .client import IGVClient


class IGVCommands:
    """High-level IGV batch commands."""

    def __init__(self, client: IGVClient):
        """
        Initialize IGV commands.

        Args:
            client: IGV client instance.
        """
        self.client = client

    def new(self) -> None:
        """Clear the current IGV session."""
        self.client.execute("new")

    def load(self, path: str) -> None:
        """Load a data file, e.g. a BAM file."""
        self.client.execute(f"load {path}")

    def snapshot_directory(self, path: str) -> None:
        """Set the directory IGV writes snapshots to."""
        self.client.execute(f"snapshotDirectory {path}")

    def goto(self, location: str) -> None:
        """Navigate to a genomic location."""
        self.client.execute(f"goto {location}")

    def collapse(self) -> None:
        """Switch tracks to collapsed display mode."""
        self.client.execute("collapse")

    def sort_base(self, location: str) -> None:
        """Sort alignments by base at the given location."""
        self.client.execute(f"sort base {location}")

    def snapshot(self, filename: str) -> None:
        """Save the current view as an image in the snapshot directory."""
        self.client.execute(f"snapshot {filename}")
