"""Example: using the service layer directly (without Flask).

Controllers are a thin layer; the business rules live in the services.
"""

import importlib

from config import get_settings_module

from src.mess_system.mess_system.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, jwt_secret=settings.JWT_SECRET)
    for detail in container.subscription_service.my_subscriptions(user_id=3):
        print(detail.to_dict())


if __name__ == "__main__":
    main()
