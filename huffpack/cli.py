from __future__ import annotations
from typing import List, Optional
import argparse
import logging
import sys

import requests

from huffpack.apiservice import create_app
from huffpack.client import ServiceClient
from huffpack.config import Config
from huffpack.container import decode, encode
from huffpack.errors import HuffmanError

logger = logging.getLogger("huffpack")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="huffpack", description="Huffman compression of whole files"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="log debug diagnostics"
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    for command, help_text in (
        ("compress", "compress INPUT into the container file OUTPUT"),
        ("decompress", "restore OUTPUT from the container file INPUT"),
    ):
        sub = subparsers.add_parser(command, help=help_text)
        sub.add_argument("input_path", metavar="INPUT")
        sub.add_argument("output_path", metavar="OUTPUT")
        sub.add_argument(
            "-f", "--force", action="store_true", help="overwrite OUTPUT if it exists"
        )
        sub.add_argument(
            "--remote",
            action="store_true",
            help="send the file to a huffpack service instead of working locally",
        )
        sub.add_argument("--service-url", help="service base URL for --remote")

    serve = subparsers.add_parser("serve", help="run the HTTP compression service")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8080)

    return parser.parse_args(argv)


def read_file(path_input: str) -> bytes:
    with open(path_input, "rb") as f:
        return f.read()


def write_file(path_output: str, content: bytes, force: bool = False) -> None:
    with open(path_output, "wb" if force else "xb") as f:
        f.write(content)


def run_codec(args: argparse.Namespace, config: Config) -> None:
    content = read_file(args.input_path)
    if args.remote:
        client = ServiceClient(
            base_url=args.service_url or config.service_url, timeout=config.http_timeout
        )
        if args.command == "compress":
            result = client.compress(content, filename=args.input_path)
        else:
            result = client.decompress(content, filename=args.input_path)
    elif args.command == "compress":
        result = encode(content)
    else:
        result = decode(content)

    # the whole result exists before the output file is touched
    write_file(args.output_path, result, force=args.force)
    if args.command == "compress":
        logger.info("Compressed! %d bytes -> %d bytes", len(content), len(result))
    else:
        logger.info("Decompressed! %d bytes -> %d bytes", len(content), len(result))


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    config = Config.from_env()
    logging.basicConfig(level=logging.DEBUG if args.verbose else config.log_level)

    if args.command == "serve":
        create_app(config).run(host=args.host, port=args.port)
        return 0

    try:
        run_codec(args, config)
    except HuffmanError as e:
        print(f"ERROR: {args.command} failed ({type(e).__name__}): {e}", file=sys.stderr)
        return 1
    except (OSError, requests.RequestException) as e:
        print(f"ERROR: {args.command} failed: {e}", file=sys.stderr)
        return 1
    return 0
