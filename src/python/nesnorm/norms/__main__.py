#!/usr/bin/env python3

from __future__ import annotations
import os
import h5py
import argparse
import nesnorm
from nesnorm.output import subtitle


NAME = 'nesnorm norms'


parser = argparse.ArgumentParser(prog='python -m nesnorm.norms')
parser.add_argument(
    'file',
    help='The HDF5 file containing the input scores.',
)
parser.add_argument(
    '--real',
    help='The group containing the real score of each item.',
    required=True,
)
parser.add_argument(
    '--rnd',
    help='The group containing the permutation scores of each item.',
    required=True,
)
parser.add_argument(
    '--norm',
    help='The normalization scheme to apply.',
    choices=nesnorm.list_names(),
    default=nesnorm.NormScheme.MEANDIV.value,
)
parser.add_argument(
    '--group',
    help='The group in the output file to place the normalized scores.',
    default="",
)
parser.add_argument(
    '-o', '--out',
    help='The output HDF5 file to write to.',
    default='norm.h5'
)
parser.add_argument(
    '--overwrite',
    help='Overwrite an existing HDF5 file (the whole file, not just the group).',
    action='store_true',
)
parser.add_argument(
    '--suffix',
    help='Appended to the name of the real-score vector.',
    default='_norm',
)
parser.add_argument(
    '--chunks',
    help='Normalize this many items per block, in parallel.',
    type=int,
    default=None,
)


def _remove_if_exists(
    path: str,
    overwrite: bool = False
) -> None:
    if os.path.exists(path):
        if overwrite:
            os.remove(path)


def main(argv: list[str] | None = None) -> nesnorm.NormalizationOutcome:

    args = parser.parse_args(argv)
    if args.chunks is not None and args.chunks < 1:
        parser.error('--chunks must be positive.')

    print()
    print(nesnorm.title(NAME, nesnorm.__version__))
    print(subtitle(args.group))

    opts = nesnorm.Opts(
        suffix=args.suffix,
        chunks=args.chunks,
    )

    with h5py.File(args.file, 'r') as f:

        real = nesnorm.LabeledScoreVector.load(args.real, f)
        rnd = nesnorm.ScoreTable.load(args.rnd, f)

    # The inputs are in memory, so the output may replace the input file

    _remove_if_exists(args.out, args.overwrite)

    outcome = nesnorm.normalize(args.norm, real, rnd, opts)

    # Save to file

    outcome.save(args.group, args.out)

    # Print stats

    nesnorm.stats(outcome)

    return outcome


if __name__ == '__main__':

    main()
