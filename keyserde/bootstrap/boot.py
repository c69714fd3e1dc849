import logging

from keyserde.bootstrap.config.loader import get_cli_args
from keyserde.bootstrap.deps import get_formats, get_runner
from keyserde.core.fixtures import FixtureError
from keyserde.core.helpers.utils import setup_logging
from keyserde.core.keys import derive_key_material


def main():
    cli = get_cli_args()
    setup_logging(cli.log_level)
    logger = logging.getLogger("keyserde.boot")

    if cli.command == "list":
        for fmt in get_formats():
            kind = "human-readable" if fmt.human_readable else "binary"
            print(f"{fmt.name:<20} {kind}")
        return

    runner = get_runner()
    material = derive_key_material()

    try:
        if cli.command == "generate":
            written = runner.serialize_all(material)
            logger.info(f"Wrote {len(written)} fixture(s)")
        else:
            verified = runner.verify_all(material)
            logger.info(f"All {len(verified)} fixture(s) verified")
    except FixtureError as ex:
        logger.error(str(ex))
        raise SystemExit(1)


if __name__ == "__main__":
    main()
