from pathlib import Path

import xxhash

from .. import config
from ..exceptions import FileHashError


class FileHasher:
    def fingerprint(self, path: Path) -> str:
        """
        Computes the fingerprint embedded in organized filenames.

        Strategy:
        Only the first MAX_HASHABLE_BYTES (10 MiB) are read, so large videos
        cost the same as a photo. The result depends on nothing but those
        bytes: same prefix, same fingerprint, on every machine and run.
        Returns 16 lowercase hex digits (xxHash64, seed 0).
        """
        h = xxhash.xxh64()
        remaining = config.MAX_HASHABLE_BYTES
        try:
            size = path.stat().st_size
            with open(path, 'rb') as f:
                while remaining > 0:
                    chunk = f.read(min(config.HASH_CHUNK_SIZE, remaining))
                    if not chunk:
                        break
                    h.update(chunk)
                    remaining -= len(chunk)
        except OSError as e:
            raise FileHashError(f"Cannot hash {path}: {e}") from e

        if size > 0 and remaining == config.MAX_HASHABLE_BYTES:
            raise FileHashError(f"Read 0 bytes from {path} although it claims {size} bytes")

        return h.hexdigest()
