import os
import sys
import psutil


PHRED_OFFSET = 33
MEBIBYTE = 1024 * 1024


class QualossError(Exception):
    pass


class InputError(QualossError):
    """FASTQ file is missing, unreadable or malformed."""


class ContractViolation(QualossError):
    """A quantizer returned something it promised not to."""


class LengthMismatch(ContractViolation):
    pass


class EmptyCorpus(QualossError):
    """Statistic is undefined for a corpus without reads."""


class DestinationError(QualossError):
    """Output file cannot be created or written."""


def log(message: str):
    print(message, file=sys.stderr)


def log_error(err: Exception):
    log("qualoss: error: {}".format(err))


def check_num_threads(thread_count: int) -> int:
    system_thread_count = psutil.cpu_count()
    if thread_count < 1:
        log("Number of threads has to be a positive integer, using 1 thread")
        return 1
    if system_thread_count is not None and thread_count > system_thread_count:
        log("System does not have {} number of threads".format(thread_count))
        log("Using {} threads instead".format(system_thread_count))
        return system_thread_count
    return thread_count


def check_input_file(seq_file: str):

    if seq_file is None:
        raise InputError("Please provide the path to the FASTQ file")
    if not os.path.exists(seq_file):
        raise InputError("{} does not exist".format(seq_file))
    if not os.path.isfile(seq_file):
        raise InputError("{} is not a file".format(seq_file))
    if not os.access(seq_file, os.R_OK):
        raise InputError("{} is not readable".format(seq_file))
