# 로깅 설정
# - 앱 시작 시 1회 호출
# - 각 모듈은 logging.getLogger(__name__)만 사용

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # motor/pymongo 디버그 로그는 너무 많음
    logging.getLogger("pymongo").setLevel(logging.WARNING)
