"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/hasher.py
Implements content fingerprinting using FileRecord objects and a pluggable hash algorithm.

HasherImpl streams each file through an xxHash64 digest in fixed-size chunks, so memory
use stays bounded regardless of file size. fingerprint_all() fans a batch of records out
to a fixed set of worker threads fed by a bounded queue and returns only after every
record has been attempted.
"""

import logging
import os
import queue
import threading
from dataclasses import dataclass
from typing import Dict, List

import xxhash

from dupfinder.core.interfaces import HashAlgorithm, Digest
from dupfinder.core.models import FileRecord

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024


def default_workers() -> int:
    """Worker count used when the caller passes a non-positive value."""
    return max(1, os.cpu_count() or 1)


# Use the same way to implement and use any other hashing algorithm
class XXHashAlgorithmImpl(HashAlgorithm):
    def new(self) -> Digest:
        return xxhash.xxh64()


@dataclass
class HashError:
    """A file that could not be fingerprinted."""
    path: str
    message: str

    def __str__(self):
        return f"error hashing {self.path}: {self.message}"


class HasherImpl:
    """
    A hasher implementation that supports any algorithm via the HashAlgorithm interface.
    Caches the fingerprint on the FileRecord; a record that already has one is never rehashed.
    """

    def __init__(self, algorithm: HashAlgorithm = None, chunk_size: int = DEFAULT_CHUNK_SIZE):
        self.algorithm = algorithm or XXHashAlgorithmImpl()
        self.chunk_size = chunk_size

    def fingerprint(self, path: str) -> str:
        """
        Computes the hex digest of the full content of the file at path.
        Raises OSError if the file cannot be read.
        """
        digest = self.algorithm.new()
        with open(path, 'rb') as f:
            while True:
                chunk = f.read(self.chunk_size)
                if not chunk:
                    break
                digest.update(chunk)
        return digest.hexdigest()

    def fingerprint_all(self, records: List[FileRecord], workers: int) -> List[HashError]:
        """
        Fingerprints every record that does not have a fingerprint yet.

        Args:
            records: Records to fingerprint, mutated in place
            workers: Number of worker threads; values <= 0 fall back to default_workers()
        Returns:
            List of HashError for files that could not be read (their fingerprint stays None)
        """
        # One computation per distinct path, shared by every record with that path
        pending: Dict[str, List[FileRecord]] = {}
        for record in records:
            if record.has_fingerprint:
                continue
            pending.setdefault(record.path, []).append(record)

        if not pending:
            return []

        if workers <= 0:
            workers = default_workers()

        logger.info(f"Computing hashes for {len(pending)} files with {workers} workers")

        errors: List[HashError] = []
        errors_lock = threading.Lock()
        jobs: "queue.Queue[object]" = queue.Queue(maxsize=workers * 2)
        stop = object()

        def worker() -> None:
            while True:
                path = jobs.get()
                if path is stop:
                    return
                try:
                    digest = self.fingerprint(path)
                except Exception as e:
                    # Only the stop sentinel may end a worker
                    logger.warning(f"Error hashing {path}: {e}")
                    with errors_lock:
                        errors.append(HashError(path=path, message=str(e)))
                    continue
                for record in pending[path]:
                    if not record.has_fingerprint:
                        record.fingerprint = digest

        threads = [
            threading.Thread(target=worker, name=f"hasher-{i}", daemon=True)
            for i in range(workers)
        ]
        for thread in threads:
            thread.start()

        for path in pending:
            jobs.put(path)
        for _ in threads:
            jobs.put(stop)

        for thread in threads:
            thread.join()

        logger.info(f"Hash calculation complete ({len(errors)} errors)")
        return errors
