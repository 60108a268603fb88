"""助手回复的“打字”效果。

每隔 interval 秒多显示一个字符，视图层逐帧渲染即可。
用户消息不需要这个效果，直接整体展示。
"""

import time
from typing import Callable, Iterator

TYPING_INTERVAL = 0.015


def iter_typing_frames(
    content: str,
    interval: float = TYPING_INTERVAL,
    sleep: Callable[[float], None] = time.sleep,
) -> Iterator[str]:
    """逐字符产出 content 的前缀，最后一帧即完整内容。"""

    for i in range(1, len(content) + 1):
        if i > 1 and interval > 0:
            sleep(interval)
        yield content[:i]
