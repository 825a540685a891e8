#!/usr/bin/env python3
"""Probe every catalog record's asset and report the ones that no longer resolve."""

from __future__ import annotations

import argparse
import json
import os
import sys
from datetime import datetime

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from sampleroom.app import create_app  # noqa: E402
from sampleroom.models import COLLECTIONS  # noqa: E402


def parse_args():
    p = argparse.ArgumentParser(description='Report catalog records whose asset cannot be resolved')
    p.add_argument('--collection', choices=sorted(COLLECTIONS), action='append', default=None,
                   help='Limit to one or more collections (default: all)')
    p.add_argument('--limit', type=int, default=None, help='Max records per collection')
    p.add_argument('--report-jsonl', type=str, default=None)
    return p.parse_args()


def main():
    args = parse_args()
    app = create_app()
    resolver = app.extensions['asset_resolver']
    records = app.extensions['record_repository']

    stats = {
        'scanned': 0,
        'available': 0,
        'missing': 0,
        'no_candidates': 0,
        'errors': 0,
    }

    report_fp = open(args.report_jsonl, 'a', encoding='utf-8') if args.report_jsonl else None

    with app.app_context():
        for collection in args.collection or sorted(COLLECTIONS):
            rows = records.list(collection)
            if args.limit:
                rows = rows[:args.limit]

            for row in rows:
                stats['scanned'] += 1
                try:
                    record = row.to_asset_record()
                    candidates = resolver.candidates_for(record)
                    if not candidates:
                        stats['no_candidates'] += 1
                        _write_report(report_fp, collection, row.id, 'no_candidates', [])
                        continue
                    kinds = [c.kind for c in candidates]
                    if resolver.probe(record):
                        stats['available'] += 1
                    else:
                        stats['missing'] += 1
                        _write_report(report_fp, collection, row.id, 'missing', kinds)
                except Exception as exc:
                    stats['errors'] += 1
                    _write_report(report_fp, collection, row.id, 'error', [], str(exc))

    if report_fp:
        report_fp.close()

    print(json.dumps({'timestamp': datetime.utcnow().isoformat(), **stats}, ensure_ascii=False, indent=2))
    return 0 if stats['errors'] == 0 else 1


def _write_report(fp, collection, record_id, status, candidate_kinds, error=None):
    if not fp:
        return
    row = {
        'ts': datetime.utcnow().isoformat(),
        'collection': collection,
        'record_id': record_id,
        'status': status,
        'candidates': candidate_kinds,
        'error': error,
    }
    fp.write(json.dumps(row, ensure_ascii=False) + '\n')
    fp.flush()


if __name__ == '__main__':
    raise SystemExit(main())
