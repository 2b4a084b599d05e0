# ファイル種別
class FileType:
    IMAGE = "image" # 画像
    VIDEO = "video" # 動画

    @staticmethod
    def from_content_type(content_type: str | None) -> str:
        if content_type and content_type.startswith("image"):
            return FileType.IMAGE
        return FileType.VIDEO

# カテゴリ
class Category:
    ALL = "All" # 絞り込みなし

# 再生数加算の結果
class ViewIncrementStatus:
    SUCCESS = "success" # 成功
    FAILED = "failed" # 失敗
