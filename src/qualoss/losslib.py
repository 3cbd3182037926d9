import numpy as np
from qualoss.util import EmptyCorpus, LengthMismatch
from qualoss.fastqlib import Read
from typing import Callable, Iterable, Iterator, Tuple


Quantizer = Callable[[str, str, str], str]


def qual2arr(qual: str) -> np.ndarray:
    return np.frombuffer(qual.encode("utf-32-le"), dtype=np.uint32).astype(np.int64)


def get_read_loss(qual: str, reconstructed_qual: str) -> float:
    """Mean absolute difference between two quality strings.

    Quality symbols are compared by code point. Both strings have to be the
    same length, a read without bases has no loss.
    """
    if len(qual) != len(reconstructed_qual):
        raise LengthMismatch(
            "quality ({}) and reconstructed quality ({}) are not of the same length".format(
                len(qual), len(reconstructed_qual)
            )
        )
    if len(qual) == 0:
        return 0.0
    diff_sum = int(np.abs(qual2arr(qual) - qual2arr(reconstructed_qual)).sum())
    return diff_sum / float(len(qual))


def get_read_losses(
    reads: Iterable[Read],
    quantizer: Quantizer,
) -> Iterator[Tuple[str, float]]:
    for read in reads:
        reconstructed_qual = quantizer(read.name, read.seq, read.qual)
        try:
            loss = get_read_loss(read.qual, reconstructed_qual)
        except LengthMismatch as err:
            raise LengthMismatch("{}: {}".format(read.name, err)) from err
        yield read.name, loss


class LossAccumulator:
    """Unweighted mean of per-read losses, every read counts once."""

    def __init__(self, loss_sum=0.0, read_count: int = 0):
        self.loss_sum = np.longdouble(loss_sum)
        self.read_count = read_count

    def add(self, loss: float):
        self.loss_sum += np.longdouble(loss)
        self.read_count += 1

    def update(self, reads: Iterable[Read], quantizer: Quantizer):
        for _, loss in get_read_losses(reads, quantizer):
            self.add(loss)
        return self

    def merge(self, other: "LossAccumulator"):
        self.loss_sum += other.loss_sum
        self.read_count += other.read_count
        return self

    def mean(self) -> float:
        if self.read_count == 0:
            raise EmptyCorpus("compression loss is undefined without reads")
        return float(self.loss_sum / self.read_count)


def get_compression_loss(reads: Iterable[Read], quantizer: Quantizer) -> float:
    return LossAccumulator().update(reads, quantizer).mean()


def dump_compression_loss(loss: float):
    print("{:.6f}".format(loss))
