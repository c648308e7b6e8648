import functools
import logging

from sqlalchemy.exc import SQLAlchemyError

from allocation.services.exceptions import StorageError

logger = logging.getLogger(__name__)


def translate_storage_errors(method):
    """
    리포지토리 메서드에서 발생한 SQLAlchemy 오류를 StorageError 로 바꿔 전파합니다.
    세션은 롤백되며, 재시도나 오류 종류 구분은 하지 않습니다.
    """
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Storage failure in %s: %s", method.__qualname__, e)
            raise StorageError(f"Storage operation '{method.__name__}' failed.") from e
    return wrapper
