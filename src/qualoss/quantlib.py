import numpy as np
from qualoss.util import PHRED_OFFSET, InputError


quantizer_lst = ["block-mean", "identity"]


class IdentityQuantizer:
    def __call__(self, name: str, seq: str, qual: str) -> str:
        return qual


class BlockMeanQuantizer:
    """Stores one quality score per block of bases.

    Every block of ``block_size`` consecutive quality scores is collapsed to
    the floor of its mean Phred score and inflated back by repeating that
    score over the block. The last block may be shorter.
    """

    def __init__(self, block_size: int = 64, offset: int = PHRED_OFFSET):
        if block_size < 1:
            raise ValueError("block size has to be a positive integer")
        self.block_size = block_size
        self.offset = offset

    def deflate(self, qual: str) -> np.ndarray:
        try:
            qual_bytes = qual.encode("latin-1")
        except UnicodeEncodeError as err:
            raise InputError("quality string has symbols above code point 255") from err
        bq_arr = np.frombuffer(qual_bytes, dtype=np.uint8).astype(np.int64)
        bq_arr -= self.offset
        block_starts = np.arange(0, len(bq_arr), self.block_size)
        if len(block_starts) == 0:
            return np.zeros(0, dtype=np.int64)
        block_sums = np.add.reduceat(bq_arr, block_starts)
        block_lens = np.diff(np.append(block_starts, len(bq_arr)))
        return block_sums // block_lens

    def inflate(self, block_bq_arr: np.ndarray, qlen: int) -> str:
        bq_arr = np.repeat(block_bq_arr, self.block_size)[:qlen] + self.offset
        return bq_arr.astype(np.uint8).tobytes().decode("latin-1")

    def __call__(self, name: str, seq: str, qual: str) -> str:
        return self.inflate(self.deflate(qual), len(qual))


def get_quantizer(quantizer: str, block_size: int = 64):
    if quantizer == "identity":
        return IdentityQuantizer()
    elif quantizer == "block-mean":
        return BlockMeanQuantizer(block_size)
    raise ValueError(
        "{} is not a supported quantizer, choose from {}".format(
            quantizer, ", ".join(quantizer_lst)
        )
    )
