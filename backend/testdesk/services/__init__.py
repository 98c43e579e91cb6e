from testdesk.services import (
    audit_service,
    auth_service,
    bootstrap_service,
    question_bank_service,
    randomizer,
    scoring_service,
    test_service,
    user_service,
)

__all__ = [
    'audit_service',
    'auth_service',
    'bootstrap_service',
    'question_bank_service',
    'randomizer',
    'scoring_service',
    'test_service',
    'user_service',
]
