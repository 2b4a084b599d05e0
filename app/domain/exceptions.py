class StreakError(Exception):
    """ストリーク処理の基底例外"""


class StreakValidationError(StreakError):
    """必須項目が未指定"""


class SelfStreakError(StreakError):
    """自分自身へのストリーク"""


class StreakContentionError(StreakError):
    """同時更新が続き書き込みできなかった"""
