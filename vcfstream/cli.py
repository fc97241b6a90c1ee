"""Command line interface for vcfstream.

Current subcommands:
	header   – print the format version, INFO / FILTER definitions and samples
	records  – stream records in batches and write a site table (TSV)
	sites    – write raw and filtered site tables to an output directory

Example:
	python -m vcfstream.cli records --vcf input.vcf --batch-size 5000 --out sites.tsv
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import pandas as pd

from .config import DEFAULT_BATCH_SIZE, DEFAULT_LOG_LEVEL
from .errors import VcfFormatError, VcfIoError
from .io import VcfReader, open_handle
from .metrics.site_metrics import SITE_COLUMNS, compute_site_table, filter_site_table, site_row
from .utils import get_logger

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_IO_ERROR = 3
EXIT_FORMAT_ERROR = 4

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

logger = get_logger("vcfstream")


def cmd_header(args: argparse.Namespace) -> int:
	with open_handle(args.vcf) as handle:
		header = handle.header
	print(f"fileformat\t{header.fileformat}")
	infos = pd.DataFrame(
		[
			{"ID": i.id, "Number": str(i.number), "Type": i.type.value, "Description": i.description}
			for i in header.infos.values()
		],
		columns=["ID", "Number", "Type", "Description"],
	)
	filters = pd.DataFrame(
		[{"ID": f.id, "Description": f.description} for f in header.filters.values()],
		columns=["ID", "Description"],
	)
	print(f"\n## INFO ({len(infos)})")
	if not infos.empty:
		print(infos.to_csv(sep="\t", index=False), end="")
	print(f"\n## FILTER ({len(filters)})")
	if not filters.empty:
		print(filters.to_csv(sep="\t", index=False), end="")
	print(f"\n## samples ({len(header.sample_names)})")
	for name in header.sample_names:
		print(name)
	return EXIT_OK


def cmd_records(args: argparse.Namespace) -> int:
	reader = VcfReader(args.vcf, max_records=args.max_site)
	rows = []
	n_batches = 0
	for batch in reader.batches(args.batch_size):
		n_batches += 1
		rows.extend(site_row(rec) for rec in batch)
		logger.debug("Batch %d: %d records", n_batches, len(batch))
	df = pd.DataFrame(rows, columns=SITE_COLUMNS)
	if args.out:
		df.to_csv(args.out, sep="\t", index=False)
		logger.info("Wrote %s records in %d batches to %s", f"{len(df):,}", n_batches, args.out)
	else:
		df.to_csv(sys.stdout, sep="\t", index=False)
	return EXIT_OK


def cmd_sites(args: argparse.Namespace) -> int:
	outdir = Path(args.out)
	outdir.mkdir(parents=True, exist_ok=True)

	reader = VcfReader(args.vcf, max_records=args.max_site)
	site_df = compute_site_table(reader)
	site_df_f = filter_site_table(site_df, min_qual=args.min_qual, pass_only=args.pass_only, verbose=True)

	# Save raw & filtered tables for transparency
	site_df.to_csv(outdir / "site_table_raw.tsv", sep="\t", index=False)
	site_df_f.to_csv(outdir / "site_table_filtered.tsv", sep="\t", index=False)
	logger.info("Site tables written to %s", outdir)
	return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
	p = argparse.ArgumentParser(prog="vcfstream", description="Streaming VCF reader")
	p.add_argument(
		"--log-level",
		default=DEFAULT_LOG_LEVEL,
		type=str.upper,
		choices=LOG_LEVELS,
		help="Logging level (DEBUG, INFO, WARNING, ERROR)",
	)
	sub = p.add_subparsers(dest="command")

	sp = sub.add_parser("header", help="Print header definitions and sample names")
	sp.add_argument("--vcf", required=True, help="Input VCF file")
	sp.set_defaults(func=cmd_header)

	sp2 = sub.add_parser("records", help="Stream records in batches and write a site table")
	sp2.add_argument("--vcf", required=True, help="Input VCF file")
	sp2.add_argument("--batch-size", type=int, default=DEFAULT_BATCH_SIZE, help="Records per batch")
	sp2.add_argument("--max-site", type=int, default=None, help="Limit number of variant sites parsed (debug)")
	sp2.add_argument("--out", default=None, help="Output TSV (default: stdout)")
	sp2.set_defaults(func=cmd_records)

	sp3 = sub.add_parser("sites", help="Raw and filtered site tables")
	sp3.add_argument("--vcf", required=True, help="Input VCF file")
	sp3.add_argument("--out", required=True, help="Output directory for tables")
	sp3.add_argument("--max-site", type=int, default=None, help="Limit number of variant sites parsed (debug)")
	sp3.add_argument("--min-qual", type=float, default=None, help="Minimum QUAL threshold")
	sp3.add_argument("--pass-only", action="store_true", help="Keep only sites whose FILTER is PASS")
	sp3.set_defaults(func=cmd_sites)
	return p


def main(argv=None) -> int:
	parser = build_parser()
	args = parser.parse_args(argv)
	logger.setLevel(args.log_level.upper())
	if not hasattr(args, "func"):
		parser.print_help()
		return EXIT_USAGE
	if getattr(args, "batch_size", 1) <= 0:
		print("--batch-size must be positive", file=sys.stderr)
		return EXIT_USAGE
	try:
		return args.func(args)
	except VcfIoError as exc:
		logger.error("%s", exc)
		return EXIT_IO_ERROR
	except VcfFormatError as exc:
		logger.error("%s", exc)
		return EXIT_FORMAT_ERROR


if __name__ == "__main__":  # pragma: no cover
	sys.exit(main())
