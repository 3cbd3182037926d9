# modules
import sys
import argparse
import warnings
import qualoss.util
from pathlib import Path
from typing import List
from qualoss.quantlib import quantizer_lst


class OptionError(Exception):
    pass


class ArgumentParser(argparse.ArgumentParser):
    """Reports malformed options instead of exiting."""

    def error(self, message):
        raise OptionError(message)


def make_wide(formatter, w=120, h=36):
    """Return a wider HelpFormatter, if possible."""
    try:
        # https://stackoverflow.com/a/5464440
        # beware: "Only the name of this class is considered a public API."
        kwargs = {"width": w, "max_help_position": h}
        formatter(None, **kwargs)
        return lambda prog: formatter(prog, **kwargs)
    except TypeError:
        warnings.warn("argparse help formatter failed, falling back.")
        return formatter


def drop_option(arguments: List[str], option_strings: List[str]) -> List[str]:

    kept = []
    skip_value = False
    for arg in arguments:
        if skip_value:
            skip_value = False
            if not arg.startswith("-"):
                continue
        if arg in option_strings:
            skip_value = True
            continue
        if any(arg.startswith(opt + "=") for opt in option_strings if opt.startswith("--")):
            continue
        kept.append(arg)
    return kept


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError("{} is not a positive integer".format(value))
    return number


def get_offending_option(arguments: List[str], message: str) -> List[str]:
    """Return the arguments matching the first option named in an error message."""
    word_lst = [word.strip(",:'\"") for word in message.split()]
    option_lst = [word for word in word_lst if word.startswith("-")]
    if not option_lst:
        return []
    option = option_lst[0].split("=")[0]
    return [arg for arg in arguments if arg.split("=")[0] == option]


def get_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="qualoss",
        add_help=False,
        exit_on_error=False,
        formatter_class=make_wide(argparse.ArgumentDefaultsHelpFormatter),
        description="""
        qualoss measures how much base quality information a lossy quality score quantizer loses on a FASTQ file
        """
    )
    parser.add_argument("fastq", type=str, nargs="?", help="FASTQ file to read (plain or gzip compressed)")
    parser.add_argument("-h", "--help", required=False, action="store_true", help="print help message")
    parser.add_argument("-v", "--version", required=False, action="store_true", help="print version")
    parser.add_argument(
        "-t", "--test", required=False, action="store_true",
        help="print the average compression loss over all reads to stdout"
    )
    parser.add_argument(
        "-f", "--file-csv", type=Path, required=False,
        help="CSV file to write quality score frequencies"
    )
    parser.add_argument(
        "-q", "--quantizer", type=str, default="block-mean", choices=quantizer_lst, required=False,
        help="quality score quantizer to evaluate"
    )
    parser.add_argument(
        "--block-size", type=positive_int, default=64, required=False,
        help="number of bases sharing one quality score (block-mean quantizer)"
    )
    parser.add_argument(
        "--chunk-size", type=positive_int, default=500, required=False, help="MiB of FASTQ records to load at once"
    )
    parser.add_argument("--threads", type=int, default=1, required=False, help="number of threads to use")
    return parser


def parse_args(program_version, arguments=None):
    parser = get_parser()
    arguments = sys.argv[1:] if arguments is None else list(arguments)
    if len(arguments) == 0:
        parser.print_help()
        parser.exit()

    while True:
        try:
            options, unknown_lst = parser.parse_known_args(arguments)
            break
        except (argparse.ArgumentError, OptionError) as err:
            qualoss.util.log("qualoss: warning: {}".format(err))
            argument_name = getattr(err, "argument_name", None)
            if argument_name:
                pruned_arguments = drop_option(arguments, argument_name.split("/"))
            else:  # e.g. ambiguous abbreviations, the option is named in the message only
                offending_lst = get_offending_option(arguments, str(err))
                pruned_arguments = [arg for arg in arguments if arg not in offending_lst]
            if pruned_arguments == arguments:
                qualoss.util.log("qualoss: warning: ignoring all arguments")
                options, unknown_lst = parser.parse_known_args([])
                break
            arguments = pruned_arguments

    for unknown in unknown_lst:
        qualoss.util.log("qualoss: warning: ignoring unrecognized argument {}".format(unknown))
    if options.help:
        parser.print_help()
    if options.version:
        print("v{}".format(program_version))
    return parser, options
