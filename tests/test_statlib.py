import random

import numpy as np
import pytest

from qualoss.fastqlib import Read
from qualoss.util import EmptyCorpus
from qualoss.statlib import (
    LengthStatisticsAccumulator,
    dump_length_statistics,
    get_length_statistics,
    get_n50,
)


def reads_of_length(qlen_lst):
    return [Read("read{}".format(i), "A" * qlen, "I" * qlen) for i, qlen in enumerate(qlen_lst)]


class TestN50:
    def test_longer_read_alone_reaches_half(self):
        assert get_n50([10, 20]) == 20

    def test_threshold_reached_exactly(self):
        # 10 + 10 is exactly half of 40
        assert get_n50([10, 10, 10, 10]) == 10
        assert get_n50([5, 15, 20]) == 20

    def test_duplicates_are_separate_entries(self):
        # 8 alone is below half of 30, 8 + 8 is above
        assert get_n50([8, 8, 7, 7]) == 8
        assert get_n50([2, 2, 2, 10, 10]) == 10

    def test_single_read(self):
        assert get_n50([42]) == 42

    def test_zero_length_reads(self):
        assert get_n50([0, 0]) == 0

    def test_empty(self):
        with pytest.raises(EmptyCorpus):
            get_n50([])

    def test_n50_is_first_length_reaching_half(self):
        rng = random.Random(7)
        for _ in range(50):
            qlen_lst = [rng.randint(1, 1000) for _ in range(rng.randint(1, 40))]
            n50 = get_n50(qlen_lst)
            assert n50 in qlen_lst

            qlen_lst = sorted(qlen_lst, reverse=True)
            total = sum(qlen_lst)
            running_sum = 0
            for qlen in qlen_lst:
                running_sum += qlen
                if 2 * running_sum >= total:
                    assert qlen == n50
                    break


class TestLengthStatistics:
    def test_two_reads(self):
        stats = get_length_statistics([10, 20])
        assert stats.read_count == 2
        assert stats.base_sum == 30
        assert stats.mean_length == 15.0
        assert stats.n50 == 20
        assert stats.min_length == 10
        assert stats.max_length == 20

    def test_single_read_has_no_spread(self):
        stats = get_length_statistics([100])
        assert stats.read_length_std == 0.0
        assert stats.min_length == stats.max_length == 100

    def test_sample_standard_deviation(self):
        stats = get_length_statistics([2, 4, 4, 4, 5, 5, 7, 9])
        assert stats.read_length_std == pytest.approx(2.138089935)

    def test_mean_between_extrema(self):
        rng = random.Random(11)
        for _ in range(50):
            stats = get_length_statistics(rng.randint(0, 500) for _ in range(rng.randint(1, 30)))
            assert stats.min_length <= stats.mean_length <= stats.max_length

    def test_large_base_sum(self):
        stats = get_length_statistics(np.full(4, 2 ** 31, dtype=np.int64))
        assert stats.base_sum == 2 ** 33

    def test_empty_corpus(self):
        with pytest.raises(EmptyCorpus):
            get_length_statistics([])


class TestLengthStatisticsAccumulator:
    def test_batches_match_single_pass(self):
        qlen_lst = [3, 1, 4, 1, 5, 9, 2, 6]
        acc = LengthStatisticsAccumulator()
        acc.update(reads_of_length(qlen_lst[:3]))
        acc.update(reads_of_length(qlen_lst[3:]))
        assert acc.result() == get_length_statistics(qlen_lst)

    def test_no_batches(self):
        with pytest.raises(EmptyCorpus):
            LengthStatisticsAccumulator().result()

    def test_empty_batch(self):
        acc = LengthStatisticsAccumulator()
        acc.update([])
        with pytest.raises(EmptyCorpus):
            acc.result()


def test_dump_length_statistics(capsys):
    dump_length_statistics(get_length_statistics([10, 20]))
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Number of reads: 2" in captured.err
    assert "Average length: 15.0" in captured.err
    assert "N50 length: 20" in captured.err
    assert "Minimal length: 10" in captured.err
    assert "Maximal length: 20" in captured.err
