"""Call the service layer directly, without going through Flask."""

import importlib

from config import get_settings_module

from lifeskill_admin.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, settings=settings)
    print(container.visit_service.get_trainer_summary(1))
    print(container.school_service.list_blocks())


if __name__ == "__main__":
    main()
