#!/usr/bin/env python3
"""
Nameorigin CLI
==============
Command-line interface for name compatibility scoring and page generation.

Usage:
    nameorigin score Emma Smith
    nameorigin surname Smith --gender girl
    nameorigin siblings Olivia
    nameorigin build surname --batch 20 --out site/
    nameorigin audit duplication --out site/
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from nameorigin import __version__

logger = logging.getLogger(__name__)

# =============================================================================
# Constants
# =============================================================================

GENDERS = ['boy', 'girl', 'unisex']
PROFILES = ['explained', 'global']
PAGE_KINDS = ['surname', 'sibling']
AUDITS = ['guards', 'duplication']

# =============================================================================
# Utilities
# =============================================================================

class Output:
    """Handles CLI output with quiet mode support."""

    def __init__(self, quiet: bool = False):
        from nameorigin.report import Reporter
        self.quiet = quiet
        self.reporter = Reporter(quiet=quiet)

    def print(self, *args, **kwargs):
        if not self.quiet:
            print(*args, **kwargs)

    def error(self, msg: str):
        print(f"Error: {msg}", file=sys.stderr)

    def success(self, msg: str):
        if not self.quiet:
            print(f"OK: {msg}")

    def json(self, data):
        print(json.dumps(data, indent=2, ensure_ascii=False))

    def table(self, headers: list, rows: list, title: str = None):
        self.reporter.table(headers, rows, title=title)


def load_dataset(args):
    from nameorigin.dataset import Dataset
    return Dataset.load(getattr(args, 'data_dir', None))


def resolve_first_name(name: str, dataset):
    """Dataset record for ``name`` when known, else the bare string."""
    record = dataset.find(name)
    return record if record is not None else name.strip()


# =============================================================================
# Commands
# =============================================================================

def cmd_syllables(args, out: Output):
    """Estimated syllable counts."""
    from nameorigin.phonetics import syllable_count

    rows = [(word, syllable_count(word)) for word in args.words]
    if args.json:
        out.json({word: count for word, count in rows})
    else:
        out.table(['Word', 'Syllables'], rows)
    return 0


def cmd_score(args, out: Output):
    """Compatibility and smoothness for one first name + surname."""
    from nameorigin.compatibility import compatibility_score, compute_smoothness, score_compatibility

    dataset = load_dataset(args)
    first = resolve_first_name(args.first, dataset)
    surname = args.surname.strip()
    if not surname:
        out.error("Surname cannot be empty")
        return 1

    result = score_compatibility(first, surname)
    smoothness = compute_smoothness(first, surname)
    global_score = compatibility_score(first, surname)

    if args.json:
        out.json({
            'first': args.first,
            'surname': surname,
            'score': result.score,
            'reasons': result.reasons,
            'global_score': global_score,
            'smoothness': smoothness.to_dict(),
        })
    else:
        out.reporter.pairing(args.first, surname, result, smoothness, global_score)
    return 0


def cmd_surname(args, out: Output):
    """Rank first names for a surname."""
    from nameorigin.compatibility import rank_first_names

    dataset = load_dataset(args)
    if not dataset.names:
        out.error("No names data found")
        return 1
    ranked = rank_first_names(dataset.names, args.surname, limit=args.limit,
                              gender=args.gender, profile=args.profile)
    if args.json:
        out.json([
            {'name': r.record.name, 'gender': r.record.gender, 'score': r.score, 'reasons': r.reasons}
            for r in ranked
        ])
    else:
        out.reporter.ranked(args.surname, ranked)
    return 0


def cmd_siblings(args, out: Output):
    """Top sibling matches and clashing names for a base name."""
    from nameorigin.harmony import SiblingHarmonyScorer

    dataset = load_dataset(args)
    base = dataset.find(args.name)
    if base is None:
        out.error(f"Name not found in dataset: {args.name}")
        return 1
    scorer = SiblingHarmonyScorer.from_dataset(dataset)
    matches = scorer.top_matches(base, dataset.names, limit=args.limit)
    clashing = scorer.clashing(base, dataset.names)

    if args.json:
        out.json({
            'name': base.name,
            'matches': [
                {'name': m.record.name, 'score': m.score,
                 'shared_origin': m.shared_origin, 'style_match': m.style_match}
                for m in matches
            ],
            'clashing': [n.name for n in clashing],
        })
    else:
        out.reporter.siblings(base.name, matches, clashing)
    return 0


def cmd_build(args, out: Output):
    """Generate surname or sibling pages."""
    from nameorigin.pages import build_sibling_pages, build_surname_pages, write_pages
    from nameorigin.settings import output_dir

    dataset = load_dataset(args)
    if not dataset.names:
        out.error("No names data found")
        return 1
    out_dir = Path(args.out) if args.out else output_dir()

    if args.kind == 'surname':
        pages = build_surname_pages(dataset, surnames=args.surnames or None, batch=args.batch)
    else:
        pages = build_sibling_pages(dataset, batch=args.batch)

    written = write_pages(pages, out_dir)
    if pages:
        min_words = min(p.word_count for p in pages)
        min_links = min(p.internal_links for p in pages)
        out.print(f"Pages: {len(written)}  min words: {min_words}  min internal links: {min_links}")
    out.success(f"Wrote {len(written)} {args.kind} pages to {out_dir}")
    return 0


def cmd_audit(args, out: Output):
    """Content-floor or duplication audit over a built site."""
    from nameorigin.audit import run_duplication_audit, scan_pages
    from nameorigin.guards import thresholds_for
    from nameorigin.settings import output_dir

    out_dir = Path(args.out) if args.out else output_dir()
    if not out_dir.is_dir():
        out.error(f"Output directory not found: {out_dir}")
        return 1

    if args.kind == 'duplication':
        report = run_duplication_audit(out_dir, expansion_mode=args.expansion)
        if args.json:
            out.json(report.to_dict())
        else:
            out.reporter.duplication(report)
        return 0 if report.passed else 1

    thresholds = thresholds_for(args.page_type) if args.page_type else None
    checks = scan_pages(out_dir, thresholds)
    failed = [c for c in checks if not c.passed]
    if args.json:
        out.json([
            {'url': c.url, 'words': c.words, 'internal_links': c.internal_links,
             'has_description': c.has_description, 'failures': c.failures}
            for c in checks
        ])
    else:
        out.reporter.page_checks(checks, only_failures=args.failures)
        out.print(f"{len(checks)} pages, {len(failed)} below floor")
    return 1 if failed else 0


def cmd_tiers(args, out: Output):
    """Smoothness tiers and harmony weights."""
    from nameorigin.compatibility import smoothness_tiers
    from nameorigin.harmony import harmony_weights

    tiers = smoothness_tiers()
    rows = []
    upper = 100
    for lower, label in tiers:
        rows.append((label, f"{lower}-{upper}"))
        upper = lower - 1
    out.table(['Tier', 'Range'], rows, title='Smoothness tiers')
    out.table(['Component', 'Weight'],
              [(k, f"{v}%") for k, v in harmony_weights().items()],
              title='Sibling harmony weights')
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='nameorigin',
        description='Nameorigin - Name Compatibility Scoring & Page Generator',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s syllables Olivia Smith
  %(prog)s score Emma Smith
  %(prog)s surname Smith --gender girl --limit 12
  %(prog)s siblings Olivia --json
  %(prog)s build surname --batch 20 --out site/
  %(prog)s build sibling --batch 150
  %(prog)s audit guards --out site/
  %(prog)s audit duplication --out site/ --expansion
  %(prog)s tiers
"""
    )

    parser.add_argument('--version', '-V', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--quiet', '-q', action='store_true', help='Suppress non-essential output')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')
    parser.add_argument('--data-dir', '-d', help='Dataset directory (default: paths.data_dir)')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # --- syllables ---
    p = subparsers.add_parser('syllables', aliases=['syl'], help='Estimate syllable counts')
    p.add_argument('words', nargs='+', help='Words to count')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    # --- score ---
    p = subparsers.add_parser('score', aliases=['s'], help='Score a first name with a surname')
    p.add_argument('first', help='First name')
    p.add_argument('surname', help='Surname')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    # --- surname ---
    p = subparsers.add_parser('surname', aliases=['sur'], help='Rank first names for a surname')
    p.add_argument('surname', help='Surname')
    p.add_argument('--gender', '-g', choices=GENDERS, help='Only names of this gender')
    p.add_argument('--limit', '-n', type=int, default=12, help='Max results (default: 12)')
    p.add_argument('--profile', '-p', choices=PROFILES, default='explained',
                   help='Scoring profile (default: explained)')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    # --- siblings ---
    p = subparsers.add_parser('siblings', aliases=['sib'], help='Sibling harmony matches')
    p.add_argument('name', help='Base name')
    p.add_argument('--limit', '-n', type=int, default=12, help='Max matches (default: 12)')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    # --- build ---
    p = subparsers.add_parser('build', aliases=['b'], help='Generate pages')
    p.add_argument('kind', choices=PAGE_KINDS, help='Page family')
    p.add_argument('--batch', type=int, help='Batch size (capped at the configured maximum)')
    p.add_argument('--out', '-o', help='Output directory (default: OUT_DIR or paths.out_dir)')
    p.add_argument('--surnames', nargs='+', help='Surnames to build instead of the configured list')

    # --- audit ---
    p = subparsers.add_parser('audit', aliases=['a'], help='Audit generated pages')
    p.add_argument('kind', choices=AUDITS, help='Audit to run')
    p.add_argument('--out', '-o', help='Site directory (default: OUT_DIR or paths.out_dir)')
    p.add_argument('--page-type', '-t', help='Hold every page to this page type minimums')
    p.add_argument('--failures', '-f', action='store_true', help='Only list failing pages')
    p.add_argument('--expansion', action='store_true', help='Gate only on risk and tier repetition')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    # --- tiers ---
    subparsers.add_parser('tiers', help='Show smoothness tiers and harmony weights')

    # Parse
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    if not args.command:
        parser.print_help()
        return 0

    # Handle aliases
    cmd_map = {
        'syl': 'syllables',
        's': 'score',
        'sur': 'surname',
        'sib': 'siblings',
        'b': 'build',
        'a': 'audit',
    }
    command = cmd_map.get(args.command, args.command)

    # Output handler
    out = Output(quiet=getattr(args, 'quiet', False))

    # Dispatch
    commands = {
        'syllables': cmd_syllables,
        'score': cmd_score,
        'surname': cmd_surname,
        'siblings': cmd_siblings,
        'build': cmd_build,
        'audit': cmd_audit,
        'tiers': cmd_tiers,
    }

    handler = commands.get(command)
    if handler:
        try:
            return handler(args, out)
        except KeyboardInterrupt:
            out.print("\nCancelled.")
            return 130
        except Exception as e:
            out.error(str(e))
            if args.verbose:
                import traceback
                traceback.print_exc()
            return 1

    parser.print_help()
    return 0


if __name__ == '__main__':
    sys.exit(main())
