"""采集能力端口。

语音转文字与拍照都由运行平台完成，这里只定义协议，
由外层应用注入具体适配器；编排器本身不依赖这些端口。
"""

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class CapturedImage:
    """一次拍照/上传的结果。data 只在本地使用，不会发给补全端点。"""

    data: bytes
    mime_type: str = "image/jpeg"
    description: str = ""


class TranscriptionSource(Protocol):
    def transcribe(self) -> str:
        """返回一段语音的识别文本，可能为空。"""
        ...


class ImageSource(Protocol):
    def capture(self) -> CapturedImage:
        ...
