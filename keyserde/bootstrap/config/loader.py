import argparse
import os
from functools import lru_cache
from pathlib import Path

COMMANDS = ("verify", "generate", "list")


@lru_cache
def get_cli_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="keyserde",
        description=(
            "Cross-check secp256k1 key material against stored fixtures.\n\n"
            "A fixed secret key, public keys and signatures derived from the\n"
            "bytes 1..32 are round-tripped through every supported serialization\n"
            "format and compared byte for byte with the files on disk."
        ),
        formatter_class=argparse.RawTextHelpFormatter
    )

    parser.add_argument(
        "command",
        nargs="?",
        default="verify",
        choices=COMMANDS,
        help=(
            "verify   → compare every format against its fixture (default).\n"
            "generate → write fresh fixtures for every format.\n"
            "list     → print the format catalogue."
        ),
    )

    parser.add_argument(
        "-c", "--config",
        type=str,
        help="Path to a keyserde configuration file"
    )

    parser.add_argument(
        "-l", "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help=(
            "Logging verbosity.\n"
            "DEBUG also reports decoded and re-encoded sizes per format.\n\n"
            "Example:\n"
            "  --log-level DEBUG"
        ),
    )

    parser.add_argument(
        "-d", "--fixtures-dir",
        type=str,
        help="Directory holding one fixture file per format"
    )

    parser.add_argument(
        "-f", "--format",
        dest="formats",
        action="append",
        metavar="NAME",
        help="Restrict the run to this format (repeatable)"
    )

    return parser.parse_args()


@lru_cache
def get_configfile() -> Path | None:
    args = get_cli_args()

    # Priority: CLI > ENV > optional default file in current working directory
    raw = args.config or os.getenv("KEYSERDECONFIG")

    if raw is None:
        file = Path.cwd() / "keyserde.yaml"
        return file if file.is_file() else None

    file = Path(raw)
    if not file.is_file():
        raise SystemExit(
            f"[config] Configuration file not found: '{file}'.\n"
            "  - Use --config <file.yaml>\n"
            "  - Or set the KEYSERDECONFIG environment variable\n"
            "  - Or place a 'keyserde.yaml' file in the current working directory."
        )

    return file
