"""A backend table kept as a JSON array in one file."""

from __future__ import annotations

import json
from pathlib import Path

from rentals.domain.exceptions import BackendError


class JsonTable:

    def __init__(self, data_dir: Path, name: str) -> None:
        self.name = name
        self._file_path = data_dir / f"{name}.json"
        self._ensure_file()

    def rows(self) -> list[dict]:
        try:
            return json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise BackendError(f"Cannot read table {self.name}: {exc}") from exc

    def write(self, rows: list[dict]) -> None:
        try:
            self._file_path.write_text(
                json.dumps(rows, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
            )
        except OSError as exc:
            raise BackendError(f"Cannot write table {self.name}: {exc}") from exc

    def next_id(self, rows: list[dict]) -> int:
        if not rows:
            return 1
        return max(int(r["id"]) for r in rows) + 1

    def upsert(self, row: dict) -> dict:
        """Insert *row* (assigning an ID when it has none) or replace it."""
        rows = self.rows()
        if row.get("id") is None:
            row = {**row, "id": self.next_id(rows)}

        # Upsert: replace if exists, otherwise append
        for i, existing in enumerate(rows):
            if str(existing["id"]) == str(row["id"]):
                rows[i] = row
                break
        else:
            rows.append(row)

        self.write(rows)
        return row

    def delete(self, row_id) -> None:
        self.write([row for row in self.rows() if str(row["id"]) != str(row_id)])

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
