"""
File-based event log store using JSONL format.

Each line is a hash chain record with seq, prev_hash, event_hash, and event data.
"""

import os
import tempfile
from typing import Any, Dict, Iterator, List, Tuple

from ..core.canonical import decode_line, encode_line
from ..core.errors import EventLogError, IntegrityError
from ..core.event_log import EventLog
from ..core.events import CodeEvent, event_from_dict, event_to_dict
from .integrity import ZERO_HASH, VerificationResult, chain_record, verify_records
from .store import EventLogStore


class FileEventLogStore(EventLogStore):
    """
    File-based event log store.

    Storage format: JSONL (newline-delimited JSON)
    Each line: {"seq": 0, "prev_hash": "...", "event_hash": "...", "event": {...}}

    Guarantees:
    - save() is atomic (temp file + rename) and fsynced
    - Hash chain integrity
    """

    def __init__(self, path: str) -> None:
        self.path = path

    def _read_records(self) -> List[Dict[str, Any]]:
        records = []
        with open(self.path, "r", encoding="utf-8") as f:
            for lineno, line in enumerate(f, start=1):
                if not line.strip():
                    continue
                records.append(decode_line(line, f"{self.path}:{lineno}"))
        return records

    def _last_seq_and_hash(self) -> Tuple[int, str]:
        """
        Returns:
            (last_seq, last_hash), or (-1, ZERO_HASH) if the log is empty or missing
        """
        if not os.path.exists(self.path):
            return -1, ZERO_HASH
        last_seq, last_hash = -1, ZERO_HASH
        for rec in self._read_records():
            last_seq = rec["seq"]
            last_hash = rec["event_hash"]
        return last_seq, last_hash

    def save(self, log: EventLog) -> int:
        directory = os.path.dirname(os.path.abspath(self.path))
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix=".codereplay-", dir=directory)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    prev_hash = ZERO_HASH
                    for seq, event in enumerate(log):
                        rec = chain_record(seq, prev_hash, event_to_dict(event))
                        f.write(encode_line(rec))
                        prev_hash = rec["event_hash"]
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
                raise
        except OSError as ex:
            raise EventLogError(str(ex)) from ex
        return len(log)

    def append(self, event: CodeEvent) -> int:
        """
        Append one event to the end of the chain.

        Returns:
            Sequence number assigned to the event
        """
        try:
            last_seq, last_hash = self._last_seq_and_hash()
            seq = last_seq + 1
            rec = chain_record(seq, last_hash, event_to_dict(event))
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(encode_line(rec))
                f.flush()
                os.fsync(f.fileno())
        except OSError as ex:
            raise EventLogError(str(ex)) from ex
        return seq

    def read(self) -> Iterator[CodeEvent]:
        """
        Read events from log.

        Raises:
            FileNotFoundError: If the log file does not exist
            EventLogError: If a record cannot be decoded
        """
        for rec in self._read_records():
            try:
                event = rec["event"]
            except (KeyError, TypeError) as ex:
                raise EventLogError(f"{self.path}: record without event") from ex
            yield event_from_dict(event)

    def load(self, verify: bool = True) -> EventLog:
        """
        Load the stored log.

        Raises:
            IntegrityError: If verify is set and the hash chain is broken
        """
        if verify:
            result = self.verify()
            if not result.ok:
                raise IntegrityError(
                    f"{self.path}: hash chain broken at record {result.broken_at}: {result.reason}"
                )
        return EventLog(self.read())

    def verify(self) -> VerificationResult:
        return verify_records(self._read_records())

    def records(self) -> List[Dict[str, Any]]:
        """Raw stored records (for inspection tooling)."""
        return self._read_records()
