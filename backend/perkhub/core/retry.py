# 재시도 로직 유틸리티
# 주니어 개발자님께: 서버가 뜰 때 MongoDB가 아직 준비되지 않았을 수 있습니다
# (docker compose로 함께 띄우는 경우 등). 몇 번 재시도하면 대부분 연결됩니다.
# tenacity 라이브러리를 사용하여 재시도 로직을 쉽게 구현할 수 있습니다.

from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
    before_sleep_log,
    after_log,
)
import logging
from typing import Type, Tuple

from .exceptions import DatabaseUnavailableError

logger = logging.getLogger(__name__)


def create_db_retry_decorator(
    max_attempts: int = 3,
    initial_wait: float = 1.0,
    max_wait: float = 10.0,
    exceptions: Tuple[Type[Exception], ...] = (DatabaseUnavailableError,)
):
    """
    DB 연결용 재시도 데코레이터를 생성하는 팩토리 함수입니다.

    1. max_attempts: 최대 시도 횟수 (처음 1번 + 재시도 포함)
    2. initial_wait: 첫 재시도 전 대기 시간 (초)
    3. max_wait: 최대 대기 시간 (초)
    4. exceptions: 재시도할 예외 타입

    마지막 시도까지 실패하면 원래 예외를 그대로 다시 던집니다 (reraise=True).
    async 함수에도 그대로 붙일 수 있습니다.
    """
    return retry(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(
            multiplier=2,
            min=initial_wait,
            max=max_wait
        ),
        retry=retry_if_exception_type(exceptions),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        after=after_log(logger, logging.DEBUG),
        reraise=True,
    )
