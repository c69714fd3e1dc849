import json
from functools import lru_cache

from pydantic import ValidationError

from keyserde.bootstrap.config.loader import get_cli_args
from keyserde.bootstrap.config.settings import KeyserdeConfig
from keyserde.core.fixtures import FixtureFormat, FixtureRunner, FixtureStore, UnknownFormatError, select_formats
from keyserde.infra.catalog import build_formats


@lru_cache
def get_runner() -> FixtureRunner:
    config = get_config()
    return FixtureRunner(
        store=FixtureStore(config.fixtures_dir),
        formats=get_formats(),
        consistency=config.check_consistency
    )


@lru_cache
def get_formats() -> tuple[FixtureFormat, ...]:
    config = get_config()
    try:
        return select_formats(build_formats(), config.formats)
    except UnknownFormatError as ex:
        raise SystemExit(f"[config] {ex.args[0]}")


@lru_cache
def get_config() -> KeyserdeConfig:
    args = get_cli_args()

    # CLI flags win over environment and configuration file
    overrides = {}
    if args.fixtures_dir is not None:
        overrides["fixtures_dir"] = args.fixtures_dir
    if args.formats:
        overrides["formats"] = args.formats

    try:
        return KeyserdeConfig(**overrides)
    except FileNotFoundError as ex:
        raise SystemExit(f"Provide a correct configuration file path: {ex}")
    except ValidationError as ex:
        msg = ["Configuration validation failed:"]
        errs = json.loads(ex.json())
        for err in errs:
            msg.append(f"  {'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}")
        raise SystemExit("\n".join(msg))
