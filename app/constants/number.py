class SocialLinkLimit:
    MAX = 5 # プロフィールに登録できるSNSリンクの最大数

class ViewIncrementBatch:
    DEFAULT_SIZE = 10 # 1ラウンドで同時に加算する件数

class PasswordLimit:
    MAX_BYTES = 72 # bcryptがハッシュに使う最大バイト数（超過分は切り捨てられる）
