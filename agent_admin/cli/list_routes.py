# agent_admin/cli/list_routes.py
"""
Dump the HTTP surface of the admin API.

    python -m agent_admin.cli.list_routes --tag Tasks
    python -m agent_admin.cli.list_routes --format csv
"""
from __future__ import annotations

import argparse
from importlib import import_module
from typing import Dict, List, Optional

COLUMNS = ("methods", "path", "name", "tags")
HTTP_METHODS = {"GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"}


def load_app():
    return getattr(import_module("agent_admin.main"), "app")


def collect_routes(tag: Optional[str] = None, prefix: Optional[str] = None) -> List[Dict[str, str]]:
    """
    One row per path and method, sorted by path.
    Read from the OpenAPI schema, which covers routers mounted with
    include_router however they sit in app.routes.
    """
    rows: List[Dict[str, str]] = []
    paths = load_app().openapi().get("paths", {})
    for path, operations in paths.items():
        if prefix and not path.startswith(prefix):
            continue
        for method, op in operations.items():
            if method.upper() not in HTTP_METHODS:
                continue
            tags = [str(t) for t in op.get("tags", [])]
            if tag and tag.lower() not in (t.lower() for t in tags):
                continue
            rows.append({
                "methods": method.upper(),
                "path": path,
                "name": str(op.get("summary") or op.get("operationId") or ""),
                "tags": ",".join(tags),
            })
    rows.sort(key=lambda r: (r["path"], r["methods"]))
    return rows


def format_table(rows: List[Dict[str, str]]) -> str:
    if not rows:
        return "No routes found."
    widths = {c: max(len(c), *(len(r[c]) for r in rows)) for c in COLUMNS}
    lines = ["  ".join(c.upper().ljust(widths[c]) for c in COLUMNS)]
    lines.append("-" * (sum(widths.values()) + 2 * (len(COLUMNS) - 1)))
    for r in rows:
        lines.append("  ".join(r[c].ljust(widths[c]) for c in COLUMNS).rstrip())
    return "\n".join(lines)


def format_csv(rows: List[Dict[str, str]]) -> str:
    lines = [",".join(COLUMNS)]
    for r in rows:
        lines.append(f"{r['methods']},{r['path']},{r['name']},\"{r['tags']}\"")
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="List the admin API routes")
    ap.add_argument("--format", choices=["table", "csv"], default="table")
    ap.add_argument("--tag", help="only routes carrying this tag, e.g. Hierarchy")
    ap.add_argument("--prefix", help="only paths starting with this, e.g. /api/tasks")
    args = ap.parse_args(argv)

    rows = collect_routes(tag=args.tag, prefix=args.prefix)
    print(format_csv(rows) if args.format == "csv" else format_table(rows))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
