"""JSON Lines file sink for ledger events."""

import json
from pathlib import Path
from typing import Any

from wallet_ledger.exceptions import SinkError
from wallet_ledger.sinks.serialization import to_dict


class JsonFileSink:
    """Append ledger events to one ``.jsonl`` file per topic."""

    def __init__(self, output_dir: str | Path) -> None:
        """Initialize JSON file sink.

        Parameters
        ----------
        output_dir : str | Path
            Directory to write JSON Lines files.
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self._counts: dict[str, int] = {}

    def path_for(self, topic: str) -> Path:
        """Return the file a topic is written to."""
        # Use topic name as filename (replace dots with underscores)
        return self.output_dir / (topic.replace(".", "_") + ".jsonl")

    def write_batch(self, topic: str, records: list[Any]) -> None:
        """Append a batch of records to the topic file."""
        file_path = self.path_for(topic)
        try:
            with open(file_path, "a", encoding="utf-8") as f:
                for record in records:
                    f.write(json.dumps(to_dict(record), ensure_ascii=False, default=str) + "\n")
        except OSError as exc:
            raise SinkError(f"Failed to write {file_path}: {exc}") from exc

        self._counts[topic] = self._counts.get(topic, 0) + len(records)

    def close(self) -> None:
        """Print summary."""
        print(f"JSON files written to: {self.output_dir}")
        for topic, count in self._counts.items():
            print(f"  {topic}: {count} records")
