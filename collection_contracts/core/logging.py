import logging
import sys


class ContextFormatter(logging.Formatter):
    """Custom formatter that handles optional collection_id and widget fields."""
    def format(self, record):
        # Add default values for collection_id and widget if not present
        if not hasattr(record, 'collection_id'):
            record.collection_id = '-'
        if not hasattr(record, 'widget'):
            record.widget = '-'
        return super().format(record)


def configure_logging(level: int = logging.INFO) -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ContextFormatter(
        "%(asctime)s %(levelname)s %(name)s [collection=%(collection_id)s widget=%(widget)s] - %(message)s"
    ))
    logging.basicConfig(
        level=level,
        handlers=[handler],
    )
