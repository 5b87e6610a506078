import logging
import sys
from dotenv import load_dotenv
from config.settings import Settings
from flatbank.services.bank_service import build_bank_service
from menus.bankmenu import BankMenu


def setup_logging(settings):
    handler = logging.FileHandler(filename=settings.log_file, encoding='utf-8', mode='a')
    handler.setFormatter(logging.Formatter('%(asctime)s:%(levelname)s:%(name)s: %(message)s'))
    # storage failures also go to the error stream
    errors = logging.StreamHandler(sys.stderr)
    errors.setLevel(logging.ERROR)
    errors.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    for name in ('flatbank', 'menus'):
        logger = logging.getLogger(name)
        logger.setLevel(settings.log_level)
        logger.addHandler(handler)
        logger.addHandler(errors)


def main():
    load_dotenv()
    settings = Settings.load()
    setup_logging(settings)
    bank = build_bank_service(settings)
    return BankMenu(bank).run()


if __name__ == '__main__':
    sys.exit(main())
