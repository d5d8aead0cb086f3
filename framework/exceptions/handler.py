from contextlib import contextmanager
from typing import Iterator, Optional
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from framework.logging.logger import get_logger
from .errors import StorageError

logger = get_logger("exception_handler")


@contextmanager
def storage_errors(operation: str, model: Optional[str] = None) -> Iterator[None]:
    """Translate SQLAlchemy failures raised inside the block into StorageError."""
    try:
        yield
    except IntegrityError as exc:
        error_msg = str(exc.orig) if getattr(exc, "orig", None) is not None else str(exc)
        logger.warning(f"IntegrityError during {operation} on {model}: {error_msg}")
        raise StorageError(
            f"Integrity constraint violated: {error_msg}",
            operation=operation,
            model=model,
            integrity=True,
        ) from exc
    except SQLAlchemyError as exc:
        logger.critical(f"DatabaseError during {operation} on {model}: {str(exc)}")
        raise StorageError(
            f"Storage unavailable: {str(exc)}",
            operation=operation,
            model=model,
        ) from exc
