#!/usr/bin/env python3
"""
Utility script to inspect and edit a preference key/value store
"""
import argparse
import base64
import logging
import os
import sqlite3
import sys

from tabulate import tabulate

from preference_store import PreferenceStore
from preferences_kv_store import (
    DEFAULT_NAMESPACE,
    ICAC_KEY,
    ISSUER_KEYPAIR_KEY,
    ROOT_CERTIFICATE_KEY,
    PreferencesKeyValueStoreManager,
)
from sqlite_store import SQLitePreferenceStore

logger = logging.getLogger(__name__)

DEFAULT_DB_PATHS = {
    "sqlite": "preferences.db",
    "rocksdb": "preferences_rocksdb",
}


def human_readable_size(num_bytes: int) -> str:
    """Convert byte counts into a human-friendly string"""
    units = ["B", "KB", "MB", "GB", "TB"]
    size = float(num_bytes)
    for unit in units:
        if size < 1024 or unit == units[-1]:
            return f"{size:.2f} {unit}"
        size /= 1024
    return f"{size:.2f} TB"


def disk_usage(db_path: str) -> int:
    """Total size of a database file, its SQLite sidecars, or a RocksDB directory"""
    if os.path.isdir(db_path):
        size_bytes = 0
        for root, _, files in os.walk(db_path):
            for file in files:
                size_bytes += os.path.getsize(os.path.join(root, file))
        return size_bytes

    size_bytes = 0
    for path in (db_path, f"{db_path}-wal", f"{db_path}-shm"):
        if os.path.exists(path):
            size_bytes += os.path.getsize(path)
    return size_bytes


def open_store(backend: str, db_path: str) -> PreferenceStore:
    """Open the preference store for the selected backend"""
    if backend == "rocksdb":
        from rocksdb_store import RocksDBPreferenceStore

        return RocksDBPreferenceStore(db_path=db_path)
    return SQLitePreferenceStore(db_path=db_path)


def read_certificate(path: str) -> str:
    """Read a base64 (optionally PEM-armoured) certificate as single-line base64"""
    with open(path, encoding="ascii") as f:
        lines = [line.strip() for line in f if not line.startswith("-----")]

    der = base64.b64decode("".join(lines), validate=True)
    if not der:
        raise ValueError(f"No certificate data in {path}")
    return base64.b64encode(der).decode("ascii")


def truncate(value: str, width: int = 48) -> str:
    if len(value) <= width:
        return value
    return value[: width - 3] + "..."


def list_entries(manager: PreferencesKeyValueStoreManager, limit: int = 20) -> None:
    """List the entries of the namespace"""
    keys = manager.preferences.keys()[:limit]
    if not keys:
        print(f"No entries found in namespace '{manager.namespace}'")
        return

    rows = [(key, truncate(manager.get(key) or "")) for key in keys]
    print(tabulate(rows, headers=["Key", "Value"], tablefmt="grid", disable_numparse=True))


def show_status(manager: PreferencesKeyValueStoreManager) -> None:
    """Show which credential entries are present"""
    rows = [
        ("Issuer keypair", ISSUER_KEYPAIR_KEY, manager.is_issue_key_exist()),
        ("Root certificate", ROOT_CERTIFICATE_KEY, manager.is_rcac_exist()),
        ("Intermediate certificate", ICAC_KEY, manager.is_icac_exist()),
    ]
    rows = [(label, key, "present" if exists else "missing") for label, key, exists in rows]
    print(
        tabulate(
            rows, headers=["Credential", "Key", "Status"], tablefmt="grid", disable_numparse=True
        )
    )


def show_stats(store: PreferenceStore, namespace: str, db_path: str) -> None:
    """Show statistics about the store"""
    size_bytes = disk_usage(db_path)
    print("Store Statistics:")
    print(f"  Namespace entries: {len(store.keys(namespace))}")
    print(f"  Namespaces: {len(store.namespaces())}")
    print(f"  Size: {size_bytes} bytes ({human_readable_size(size_bytes)})")


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Query a preference key/value store")
    parser.add_argument(
        "--backend",
        choices=["sqlite", "rocksdb"],
        default="sqlite",
        help="Storage backend (default: sqlite)",
    )
    parser.add_argument("--db", help="Path to the database (default depends on backend)")
    parser.add_argument(
        "--namespace", default=DEFAULT_NAMESPACE, help=f"Namespace (default: {DEFAULT_NAMESPACE})"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    actions = parser.add_mutually_exclusive_group()
    actions.add_argument("--get", metavar="KEY", help="Print the value stored under KEY")
    actions.add_argument("--set", nargs=2, metavar=("KEY", "VALUE"), help="Store VALUE under KEY")
    actions.add_argument("--delete", metavar="KEY", help="Delete KEY")
    actions.add_argument("--status", action="store_true", help="Show credential entries")
    actions.add_argument("--stats", action="store_true", help="Show store statistics")
    actions.add_argument("--import-rcac", metavar="FILE", help="Store a root CA certificate")
    actions.add_argument("--import-icac", metavar="FILE", help="Store an intermediate CA certificate")
    actions.add_argument(
        "--list", type=positive_int, nargs="?", const=20, default=20, metavar="N",
        help="List up to N entries (default action, N defaults to 20)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    db_path = args.db or DEFAULT_DB_PATHS[args.backend]

    try:
        store = open_store(args.backend, db_path)
        manager = PreferencesKeyValueStoreManager(store, namespace=args.namespace)

        if args.get is not None:
            value = manager.get(args.get)
            if value is None:
                print(f"Key '{args.get}' not found", file=sys.stderr)
                return 1
            print(value)
        elif args.set is not None:
            key, value = args.set
            manager.set(key, value)
        elif args.delete is not None:
            manager.delete(args.delete)
        elif args.status:
            show_status(manager)
        elif args.stats:
            show_stats(store, args.namespace, db_path)
        elif args.import_rcac or args.import_icac:
            key = ROOT_CERTIFICATE_KEY if args.import_rcac else ICAC_KEY
            path = args.import_rcac or args.import_icac
            try:
                certificate = read_certificate(path)
            except ValueError as e:
                print(f"Error: invalid certificate: {e}", file=sys.stderr)
                return 1
            manager.set(key, certificate)
            logger.info(f"Imported {path} as '{key}'")
        else:
            list_entries(manager, args.list)
    except (sqlite3.Error, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
