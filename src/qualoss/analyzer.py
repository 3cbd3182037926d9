import time
import numpy as np
import qualoss.util
import qualoss.qvlib
import qualoss.statlib
import qualoss.losslib
import qualoss.quantlib
import multiprocessing as mp
from qualoss.util import QualossError, InputError
from qualoss.fastqlib import FastqReader, Read
from qualoss.losslib import LossAccumulator, Quantizer
from typing import Dict, List, NamedTuple, Optional


class BatchResult(NamedTuple):
    qlen_arr: np.ndarray
    qv2count: Optional[Dict[int, int]]
    loss: Optional[LossAccumulator]
    loss_err: Optional[QualossError]


def evaluate_batch(
    batch: List[Read],
    quantizer: Quantizer,
    get_histogram: bool,
    get_loss: bool,
) -> BatchResult:

    qlen_arr = np.fromiter((read.qlen for read in batch), dtype=np.int64)
    qv2count = qualoss.qvlib.get_quality_histogram(batch) if get_histogram else None
    loss = None
    loss_err = None
    if get_loss:
        try:
            loss = LossAccumulator().update(batch, quantizer)
        except QualossError as err:  # histogram and lengths are still valid
            loss_err = err
    return BatchResult(qlen_arr, qv2count, loss, loss_err)


def get_batch_windows(reader: FastqReader, chunk_size: int, threads: int):
    window = []
    for batch in reader.batches(chunk_size):
        window.append(batch)
        if len(window) == threads:
            yield window
            window = []
    if window:
        yield window


class CorpusReport:
    """Everything one pass over the FASTQ file collects."""

    def __init__(self, get_histogram: bool, get_loss: bool):
        self.stats = qualoss.statlib.LengthStatisticsAccumulator()
        self.qv2count = {} if get_histogram else None
        self.loss = LossAccumulator() if get_loss else None
        self.loss_err = None

    def merge(self, result: BatchResult):
        self.stats.add(result.qlen_arr)
        if result.qv2count is not None:
            self.qv2count = qualoss.qvlib.merge_quality_histograms(
                [self.qv2count, result.qv2count]
            )
        if self.loss is None or self.loss_err is not None:
            return
        if result.loss_err is not None:
            self.loss_err = result.loss_err
        else:
            self.loss.merge(result.loss)


def scan_corpus(
    seq_file: str,
    quantizer: Quantizer,
    get_histogram: bool,
    get_loss: bool,
    chunk_size: int,
    threads: int,
) -> CorpusReport:

    reader = FastqReader(seq_file)
    report = CorpusReport(get_histogram, get_loss)
    p = mp.Pool(threads) if threads > 1 else None
    try:
        for window in get_batch_windows(reader, chunk_size, threads):
            arg_lst = [(batch, quantizer, get_histogram, get_loss) for batch in window]
            if p is None:
                result_lst = [evaluate_batch(*arg) for arg in arg_lst]
            else:
                result_lst = p.starmap(evaluate_batch, arg_lst)
            for result in result_lst:
                report.merge(result)
            qualoss.util.log("{} reads loaded".format(reader.read_count))
    finally:
        if p is not None:
            p.close()
            p.join()
    return report


def analyze_compression(
    seq_file: Optional[str],
    csv_file: Optional[str],
    test: bool,
    quantizer: str,
    block_size: int,
    chunk_size: int,
    threads: int,
) -> Optional[CorpusReport]:

    if seq_file is None:
        return None

    cpu_start = time.time() / 60
    quantizer_fn = None
    if test:
        try:
            quantizer_fn = qualoss.quantlib.get_quantizer(quantizer, block_size)
        except ValueError as err:  # statistics and histogram do not need a quantizer
            qualoss.util.log_error(err)
            test = False

    threads = qualoss.util.check_num_threads(threads)
    chunk_bytes = max(chunk_size, 1) * qualoss.util.MEBIBYTE
    try:
        report = scan_corpus(
            seq_file,
            quantizer_fn,
            csv_file is not None,
            test,
            chunk_bytes,
            threads,
        )
    except InputError as err:
        qualoss.util.log_error(err)
        return None
    qualoss.util.log("Reads successfully loaded.")

    try:
        qualoss.statlib.dump_length_statistics(report.stats.result())
    except QualossError as err:
        qualoss.util.log_error(err)

    if csv_file is not None:
        try:
            qualoss.qvlib.dump_quality_csv(report.qv2count, csv_file)
        except QualossError as err:
            qualoss.util.log_error(err)

    if test:
        if report.loss_err is not None:
            qualoss.util.log_error(report.loss_err)
        else:
            try:
                qualoss.losslib.dump_compression_loss(report.loss.mean())
            except QualossError as err:
                qualoss.util.log_error(err)

    duration = time.time() / 60 - cpu_start
    qualoss.util.log("qualoss took {:.2f} minutes".format(duration))
    return report
