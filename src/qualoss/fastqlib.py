import os
import gzip
import pyfastx
import qualoss.util
from qualoss.util import InputError
from typing import Iterator, List, NamedTuple


class Read(NamedTuple):
    name: str
    seq: str
    qual: str

    @property
    def qlen(self) -> int:
        return len(self.seq)

    @property
    def nbytes(self) -> int:
        return len(self.name) + len(self.seq) + len(self.qual)


def make_read(name: str, seq: str, qual: str) -> Read:
    if len(seq) != len(qual):
        raise InputError(
            "read {} has {} bases but {} quality scores".format(name, len(seq), len(qual))
        )
    return Read(name, seq, qual)


def is_empty_fastq(seq_file: str) -> bool:
    if os.path.getsize(seq_file) == 0:
        return True
    with open(seq_file, "rb") as f:
        magic = f.read(2)
    if magic != b"\x1f\x8b":
        return False
    try:
        with gzip.open(seq_file, "rb") as f:
            return f.read(1) == b""
    except (OSError, EOFError) as err:
        raise InputError("cannot parse {}: {}".format(seq_file, err)) from err


class FastqReader:
    """Streams a FASTQ file as bounded batches of reads.

    The cursor only moves forward: once a batch has been handed out it cannot
    be read again from the same reader.
    """

    def __init__(self, seq_file: str):
        qualoss.util.check_input_file(seq_file)
        self.seq_file = seq_file
        self.read_count = 0
        self.is_exhausted = False
        if is_empty_fastq(seq_file):  # pyfastx rejects files without records
            self.is_exhausted = True
            self._records = iter(())
            return
        try:
            self._records = iter(pyfastx.Fastq(seq_file, build_index=False))
        except (OSError, RuntimeError, ValueError) as err:
            raise InputError("cannot parse {}: {}".format(seq_file, err)) from err

    def __iter__(self) -> Iterator[Read]:
        for batch in self.batches():
            yield from batch

    def _next_read(self):
        try:
            name, seq, qual = next(self._records)
        except StopIteration:
            self.is_exhausted = True
            return None
        except (OSError, RuntimeError, ValueError, UnicodeDecodeError) as err:
            raise InputError(
                "malformed FASTQ record in {} after {} reads: {}".format(
                    self.seq_file, self.read_count, err
                )
            ) from err
        if qual is None:
            raise InputError("{} does not have quality scores".format(self.seq_file))
        self.read_count += 1
        return make_read(name, seq, qual)

    def next_batch(self, max_bytes: int) -> List[Read]:
        batch = []
        batch_bytes = 0
        while not self.is_exhausted:
            read = self._next_read()
            if read is None:
                break
            batch.append(read)
            batch_bytes += read.nbytes
            if batch_bytes >= max_bytes:
                break
        return batch

    def batches(self, max_bytes: int = 500 * qualoss.util.MEBIBYTE) -> Iterator[List[Read]]:
        batch = self.next_batch(max_bytes)
        while batch:
            yield batch
            batch = self.next_batch(max_bytes)


def load_reads(seq_file: str) -> List[Read]:
    return list(FastqReader(seq_file))
