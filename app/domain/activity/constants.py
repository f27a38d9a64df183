"""커밋 활동 집계 상수"""

MONTH_LABELS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

MIN_YEAR = 1
MAX_YEAR = 9999

# 빈 레포(409) 또는 접근 불가 레포(404)는 오류가 아닌 "커밋 없음"으로 처리
EMPTY_REPOSITORY_STATUS_CODES = frozenset({404, 409})

NO_REPOSITORIES_NOTICE = "No repositories found for this user"
