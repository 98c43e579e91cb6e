import logging

LOG_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)-30s | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def configure_logging(level: str = 'INFO') -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, datefmt=DATE_FORMAT)
    # SQLAlchemy echoes every statement at INFO.
    logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)
