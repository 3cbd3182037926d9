import qualoss.util
from qualoss.util import DestinationError
from qualoss.fastqlib import Read
from collections import Counter, defaultdict
from typing import Dict, Iterable


def update_quality_histogram(
    qv2count: Dict[int, int],
    reads: Iterable[Read],
) -> Dict[int, int]:

    symbol2count = Counter()
    for read in reads:
        symbol2count.update(read.qual)
    for symbol, count in symbol2count.items():
        qv = ord(symbol)
        qv2count[qv] = qv2count.get(qv, 0) + count
    return qv2count


def get_quality_histogram(reads: Iterable[Read]) -> Dict[int, int]:
    return update_quality_histogram({}, reads)


def merge_quality_histograms(qv2count_lst: Iterable[Dict[int, int]]) -> Dict[int, int]:
    qv2count = defaultdict(lambda: 0)
    for partial_qv2count in qv2count_lst:
        for qv, count in partial_qv2count.items():
            qv2count[qv] += count
    return dict(qv2count)


def dump_quality_csv(qv2count: Dict[int, int], out_file: str):

    try:
        o = open(out_file, "w", encoding="utf-8", newline="\n")
    except OSError as err:
        raise DestinationError("cannot create {}: {}".format(out_file, err)) from err
    try:
        with o:
            o.write("Quality,Frequency\n")
            for qv in sorted(qv2count):
                o.write("{},{}\n".format(qv, qv2count[qv]))
    except OSError as err:
        raise DestinationError("cannot write {}: {}".format(out_file, err)) from err
    qualoss.util.log("CSV file successfully created.")
