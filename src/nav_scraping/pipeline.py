import logging
from datetime import date
from pathlib import Path
from typing import Optional

from .core import Settings, load_settings
from .extractors import build_extractors
from .services import NavService, export_filename, export_to_excel


def run_export(
    settings: Optional[Settings] = None,
    service: Optional[NavService] = None,
    logger: Optional[logging.Logger] = None,
    today: Optional[date] = None,
) -> Path:
    logger = logger or logging.getLogger("nav.pipeline")
    settings = settings or load_settings()
    service = service or NavService(build_extractors(settings), max_workers=settings.scrape.max_workers)

    records = service.get_all_navs()
    if not records:
        logger.warning("No records collected from any source.")

    export_dir = settings.paths.export_dir
    export_dir.mkdir(parents=True, exist_ok=True)
    path = export_dir / export_filename(today)
    path.write_bytes(export_to_excel(records))
    logger.info("Wrote %s records to %s.", len(records), path)
    return path


def main() -> None:
    settings = load_settings()
    logging.basicConfig(level=settings.log_level.upper())
    logger = logging.getLogger("nav.pipeline")
    try:
        run_export(settings=settings, logger=logger)
    except Exception:
        logger.exception("NAV export failed.")
        raise


if __name__ == "__main__":
    main()
