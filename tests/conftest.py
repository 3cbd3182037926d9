import pytest
from qualoss.fastqlib import Read


def format_fastq(read_lst):
    return "".join(
        "@{}\n{}\n+\n{}\n".format(name, seq, qual) for (name, seq, qual) in read_lst
    )


@pytest.fixture
def write_fastq(tmp_path):
    """Write (name, seq, qual) tuples to a FASTQ file and return its path."""

    def _write_fastq(read_lst, file_name="reads.fastq"):
        path = tmp_path / file_name
        path.write_text(format_fastq(read_lst))
        return str(path)

    return _write_fastq


@pytest.fixture
def simple_reads():
    return [
        Read("read1", "ACGT", "#%#%"),
        Read("read2", "AC", "II"),
    ]


@pytest.fixture
def simple_fastq(write_fastq, simple_reads):
    return write_fastq(simple_reads)
