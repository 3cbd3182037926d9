#!/usr/bin/env python3
# modules
import qualoss.analyzer
from qualoss import __version__
from qualoss.parse_args import parse_args


def main(arguments=None):
    parser, options = parse_args(program_version=__version__, arguments=arguments)
    qualoss.analyzer.analyze_compression(
        options.fastq,  # FASTQ file
        options.file_csv,  # CSV file: quality score frequencies
        options.test,  # bool: print average compression loss
        options.quantizer,  # str: block-mean or identity
        options.block_size,  # int: bases per quality block
        options.chunk_size,  # int: MiB per batch
        options.threads,  # maximum number of threads
    )


if __name__ == "__main__":
    main()
