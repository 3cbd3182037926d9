import numpy as np
import qualoss.util
from qualoss.util import EmptyCorpus
from qualoss.fastqlib import Read
from typing import Iterable, List, NamedTuple


class LengthStatistics(NamedTuple):
    read_count: int
    base_sum: int
    mean_length: float
    n50: int
    min_length: int
    max_length: int
    read_length_std: float


def get_n50(qlen_arr: np.ndarray) -> int:

    qlen_arr = np.sort(np.asarray(qlen_arr, dtype=np.int64))[::-1]
    if len(qlen_arr) == 0:
        raise EmptyCorpus("N50 is undefined without reads")
    base_sum = int(qlen_arr.sum())
    qlen_cumsum = np.cumsum(qlen_arr)
    idx = int(np.argmax(qlen_cumsum * 2 >= base_sum))  # first read reaching half of the bases
    return int(qlen_arr[idx])


def get_length_statistics(qlen_lst: Iterable[int]) -> LengthStatistics:

    if isinstance(qlen_lst, np.ndarray):
        qlen_arr = qlen_lst.astype(np.int64, copy=False)
    else:
        qlen_arr = np.fromiter(qlen_lst, dtype=np.int64)
    read_count = len(qlen_arr)
    if read_count == 0:
        raise EmptyCorpus("length statistics are undefined without reads")

    base_sum = int(qlen_arr.sum())
    qlen_std = float(qlen_arr.std(ddof=1)) if read_count > 1 else 0.0
    return LengthStatistics(
        read_count=read_count,
        base_sum=base_sum,
        mean_length=base_sum / float(read_count),
        n50=get_n50(qlen_arr),
        min_length=int(qlen_arr.min()),
        max_length=int(qlen_arr.max()),
        read_length_std=qlen_std,
    )


class LengthStatisticsAccumulator:
    def __init__(self):
        self.qlen_arr_lst: List[np.ndarray] = []

    def add(self, qlen_arr: np.ndarray):
        self.qlen_arr_lst.append(np.asarray(qlen_arr, dtype=np.int64))

    def update(self, reads: Iterable[Read]):
        self.add(np.fromiter((read.qlen for read in reads), dtype=np.int64))

    def result(self) -> LengthStatistics:
        if self.qlen_arr_lst:
            qlen_arr = np.concatenate(self.qlen_arr_lst)
        else:
            qlen_arr = np.zeros(0, dtype=np.int64)
        return get_length_statistics(qlen_arr)


def dump_length_statistics(stats: LengthStatistics):
    qualoss.util.log("FASTQ reads:")
    qualoss.util.log("Number of reads: {}".format(stats.read_count))
    qualoss.util.log("Number of bases: {}".format(stats.base_sum))
    qualoss.util.log("Average length: {}".format(stats.mean_length))
    qualoss.util.log("N50 length: {}".format(stats.n50))
    qualoss.util.log("Minimal length: {}".format(stats.min_length))
    qualoss.util.log("Maximal length: {}".format(stats.max_length))
    qualoss.util.log("Read length std: {}\n".format(stats.read_length_std))
