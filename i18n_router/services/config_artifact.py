"""
Client Config Artifact Service

Builds the read-only snapshot of the normalized locale config that page
scripts consult, and writes it into the site's build output.
"""

import json
import logging
from pathlib import Path

from i18n_router.config import NormalizedConfig, settings
from i18n_router.schemas.locale import ClientConfigSnapshot

logger = logging.getLogger(__name__)

ARTIFACT_BASENAME = "i18n-router-config"
CLIENT_GLOBAL = "__I18N_ROUTER_CONFIG__"


def build_client_config(
    config: NormalizedConfig,
    cookie_name: str | None = None,
    storage_key: str | None = None,
) -> ClientConfigSnapshot:
    """Snapshot the normalized config for the client context."""
    return ClientConfigSnapshot(
        locales=config.locales,
        path_to_locale=config.path_to_locale,
        locale_to_path=config.locale_to_path,
        default_locale=config.default_locale,
        locale_names=config.locale_names,
        switcher_position=config.switcher_position,
        cookie_name=cookie_name or settings.cookie_name,
        storage_key=storage_key or settings.storage_key,
    )


def render_client_config_json(snapshot: ClientConfigSnapshot) -> str:
    return json.dumps(snapshot.model_dump(by_alias=True), ensure_ascii=False, indent=2)


def render_client_config_script(snapshot: ClientConfigSnapshot) -> str:
    """Render the snapshot as a script assigning a frozen window global."""
    payload = json.dumps(snapshot.model_dump(by_alias=True), ensure_ascii=False)
    return f"window.{CLIENT_GLOBAL} = Object.freeze({payload});\n"


def write_client_config(snapshot: ClientConfigSnapshot, out_dir: str | Path) -> list[Path]:
    """
    Write the snapshot as JSON and as a script into ``out_dir``.

    Args:
        snapshot: Client config snapshot
        out_dir: Build output directory, created if missing

    Returns:
        Paths of the written files
    """
    out_path = Path(out_dir)
    out_path.mkdir(parents=True, exist_ok=True)

    json_file = out_path / f"{ARTIFACT_BASENAME}.json"
    json_file.write_text(render_client_config_json(snapshot) + "\n", encoding="utf-8")

    script_file = out_path / f"{ARTIFACT_BASENAME}.js"
    script_file.write_text(render_client_config_script(snapshot), encoding="utf-8")

    logger.info("Wrote client config for %d locale(s) to %s", len(snapshot.locales), out_path)
    return [json_file, script_file]
