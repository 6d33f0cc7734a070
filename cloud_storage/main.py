# main.py
import argparse
import json
import logging
from typing import List, Optional

from dropbox.exceptions import DropboxException
from pydantic import ValidationError

from .config import Settings, get_settings, get_dropbox_settings, get_s3_settings
from .dbox import DropboxAdapter
from .s3 import AmazonS3Adapter
from .storage.base import StorageAdapter
from .exceptions import StorageError


def setup_logging():
    """Configures logging to console and, when LOG_FILE is set, to a file."""
    settings = get_settings()
    log_level_name = settings.LOG_LEVEL.upper()

    # Get the root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level_name)

    # Clear any existing handlers to prevent duplicate logs on re-runs or implicit configs
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    root_logger.addHandler(stream_handler)

    if settings.LOG_FILE:
        try:
            file_handler = logging.FileHandler(settings.LOG_FILE)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except IOError as e:
            # Log to console if file logging fails (e.g., permissions)
            root_logger.error(f"Failed to set up file logging to {settings.LOG_FILE}: {e}")

    # Reducing "noise" from third-party libraries
    for name in ("dropbox", "urllib3", "botocore", "boto3"):
        logging.getLogger(name).setLevel(logging.WARNING)


def initialize_storage_adapter(settings: Settings) -> StorageAdapter:
    """Returns the storage adapter selected by STORAGE_PROVIDER."""
    if settings.STORAGE_PROVIDER == "dropbox":
        logging.info("Using Dropbox storage provider.")
        return DropboxAdapter(get_dropbox_settings())
    if settings.STORAGE_PROVIDER == "s3":
        logging.info("Using Amazon S3 storage provider.")
        return AmazonS3Adapter(get_s3_settings())
    raise ValueError(f"Unknown STORAGE_PROVIDER: {settings.STORAGE_PROVIDER}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cloud-storage",
        description="Operate on the configured remote storage backend.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    ls = commands.add_parser("ls", help="Print the listing tree of a folder as JSON.")
    ls.add_argument("path", nargs="?", default="/")
    ls.add_argument(
        "--limit", type=int, default=None, help="Maximum recursion depth (0 = unlimited)."
    )

    get = commands.add_parser("get", help="Download a remote file.")
    get.add_argument("src")
    get.add_argument("dst")
    get.add_argument("--overwrite", action="store_true", help="Replace an existing local file.")

    put = commands.add_parser("put", help="Upload a local file.")
    put.add_argument("src")
    put.add_argument("dst")

    rm = commands.add_parser("rm", help="Delete a remote file or folder.")
    rm.add_argument("path")
    rm.add_argument(
        "--recursive", action="store_true", help="Delete folder contents one by one first."
    )

    mkdir = commands.add_parser("mkdir", help="Create a remote folder.")
    mkdir.add_argument("path")

    exists = commands.add_parser("exists", help="Check whether a remote path exists.")
    exists.add_argument("path")
    return parser


def run_command(adapter: StorageAdapter, args: argparse.Namespace) -> bool:
    """Runs one parsed CLI command against an adapter and returns its outcome."""
    if args.command == "ls":
        items = adapter.get_list(args.path, 0, args.limit)
        print(json.dumps([item.to_dict() for item in items], indent=2, ensure_ascii=False))
        return True
    if args.command == "get":
        print(adapter.download(args.src, args.dst, overwrite=args.overwrite))
        return True
    if args.command == "put":
        return adapter.upload(args.src, args.dst)
    if args.command == "rm":
        if args.recursive and not adapter.delete_recursive(adapter.get_list(args.path, 0, 0)):
            return False
        return adapter.delete(args.path)
    if args.command == "mkdir":
        return adapter.create_folder(args.path)
    if args.command == "exists":
        found = adapter.exists(args.path)
        print("yes" if found else "no")
        return found
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()

    try:
        adapter = initialize_storage_adapter(get_settings())
        ok = run_command(adapter, args)
    except (StorageError, DropboxException, NotImplementedError, OSError) as e:
        logging.error(f"Command '{args.command}' failed. Error: {e}")
        return 1
    except ValidationError as e:
        logging.error(f"Storage configuration is missing or invalid. Error: {e}")
        return 1
    return 0 if ok else 1
