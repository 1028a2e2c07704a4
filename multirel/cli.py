# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import argparse
import json
import sys
import zipfile
from pathlib import Path

from multirel.assemble import AssembleOptions, assemble_v0
from multirel.listing import list_archive


def _build_parser() -> argparse.ArgumentParser:
	p = argparse.ArgumentParser(prog="multirel", description="Multi-release archive assembly")
	sub = p.add_subparsers(dest="cmd", required=True)

	assemble = sub.add_parser("assemble", help="Assemble the multi-release archives described by a build declaration")
	assemble.add_argument("declaration", type=Path, help="Path to the build declaration (multirel-build JSON)")
	assemble.add_argument(
		"--out-dir",
		type=Path,
		default=None,
		help="Output directory (default: <declaration dir>/build/libs)",
	)
	assemble.add_argument("--dry-run", action="store_true", help="Compute and print layouts without writing archives")
	assemble.add_argument("--json", action="store_true", help="Emit machine-readable JSON report")

	inspect = sub.add_parser("inspect", help="List an archive's entries grouped by tier")
	inspect.add_argument("archive", type=Path, help="Path to the archive")
	inspect.add_argument("--json", action="store_true", help="Emit machine-readable JSON")
	return p


def main(argv: list[str] | None = None) -> int:
	p = _build_parser()
	args = p.parse_args(argv)

	if args.cmd == "assemble":
		opts = AssembleOptions(declaration_path=args.declaration, out_dir=args.out_dir, dry_run=bool(args.dry_run))
		report = assemble_v0(opts)
		if args.json:
			print(json.dumps(report.to_dict(), sort_keys=True, separators=(",", ":")))
			return 0 if report.ok else 2
		for diag in report.diagnostics:
			stream = sys.stderr if diag.severity in ("warning", "error") else sys.stdout
			print(diag.format_human(), file=stream)
		for err in report.errors:
			print(err.format_human(), file=sys.stderr)
		if not report.ok:
			return 2
		for archive in report.archives:
			tiers = ",".join(str(t) for t in archive.tiers) or "-"
			where = archive.path if archive.path is not None else "(dry run)"
			print(f"{archive.name}: {where} tiers={tiers} entries={len(archive.entries)}")
			if opts.dry_run:
				for entry in archive.entries:
					print(f"  {entry}")
		return 0

	if args.cmd == "inspect":
		try:
			listing = list_archive(args.archive)
		except (OSError, ValueError, zipfile.BadZipFile) as err:
			p.error(str(err))
		if args.json:
			print(json.dumps(listing.to_dict(), sort_keys=True, separators=(",", ":")))
			return 0
		print(f"{listing.path}: multi_release={str(listing.multi_release).lower()}")
		for tier, entries in listing.tiers.items():
			print(f"[{tier}]")
			for entry in entries:
				print(f"  {entry}")
		return 0

	raise AssertionError("unreachable")
