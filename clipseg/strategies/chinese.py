"""Chinese sentence splitting and dictionary word segmentation."""

import re

from ..models import StrategyContext
from .base import (
    CJK_CLAUSE_SEPARATOR,
    CJK_RANGE,
    CJK_RUN_PUNCTUATION,
    CJK_SENTENCE_END,
    FUNCTION_WORDS,
    SegmentationStrategy,
)

# A CJK run may contain Chinese punctuation and spaces but must end in an ideograph
CJK_RUN = re.compile(
    f"[{CJK_RANGE}]+(?:[{CJK_RANGE}\\s{CJK_RUN_PUNCTUATION}]*[{CJK_RANGE}])?"
)
CJK_WORD_RUN = re.compile(f"[{CJK_RANGE}]+")

LONG_SENTENCE_CHARS = 50

# Illustrative word list for forward maximum matching, not a real lexicon
COMMON_WORDS = frozenset(
    {
        "中文", "分词", "算法", "轻量级", "正向", "最大", "匹配", "文本", "处理",
        "浏览器", "扩展", "功能", "工具", "智能", "搜索", "体验", "用户", "开发",
        "项目", "环境", "规则", "词典", "集成", "实现", "更新", "代码", "字符",
        "数组", "函数", "方法", "返回", "结果", "参数", "长度", "循环", "判断",
        "过滤", "空格", "标点", "符号", "分割", "提取", "转换", "类型", "检测",
        "识别", "内容", "句子", "词语", "语言", "混合", "列表", "命名", "包裹",
        "路径", "链接", "仓库", "分析", "分类", "说明", "可用", "选择", "适合",
        "场景", "基础", "语义", "单元", "序号", "标记", "引号", "括号", "书名号",
        "换行", "单词", "多行", "片段", "接口", "统一", "生成", "邮箱", "电话",
        "地址", "剪贴板", "历史", "记录", "设置", "今天", "天气", "我们", "你好",
        "世界", "中国", "北京", "大学", "学习", "工作", "时间", "问题", "可以",
    }
)
MAX_WORD_LENGTH = 5


def split_chinese_sentences(text: str) -> list[str]:
    """Split Chinese text into sentences, breaking long ones at commas.

    Sentence terminators are dropped. Sentences longer than 50 characters
    are split again on ``，`` and ``、``; single-character function words
    produced by that split are discarded unless nothing else would remain.

    Args:
        text: Chinese text

    Returns:
        List of sentences and clauses
    """
    results = []
    for sentence in CJK_SENTENCE_END.split(text):
        sentence = sentence.strip()
        if not sentence:
            continue

        if len(sentence) <= LONG_SENTENCE_CHARS:
            results.append(sentence)
            continue

        parts = [part.strip() for part in CJK_CLAUSE_SEPARATOR.split(sentence)]
        parts = [part for part in parts if part]
        kept = [part for part in parts if not (len(part) == 1 and part in FUNCTION_WORDS)]
        results.extend(kept or parts)
    return results


def forward_maximum_match(
    text: str, words: frozenset = COMMON_WORDS, max_word_length: int = MAX_WORD_LENGTH
) -> list[str]:
    """Cut text greedily into the longest dictionary words.

    Positions where no dictionary word starts fall back to single characters.
    """
    text = text.strip()
    result = []
    index = 0
    while index < len(text):
        length = min(max_word_length, len(text) - index)
        while length > 1 and text[index : index + length] not in words:
            length -= 1
        result.append(text[index : index + length])
        index += length
    return result


class ChineseStrategy(SegmentationStrategy):
    """Sentence-level segmentation of the Chinese runs in a text."""

    name = "chinese"

    def segment(self, text: str, context: StrategyContext) -> list[str]:
        results = []
        for match in CJK_RUN.finditer(text):
            run = match.group(0).strip()
            if run:
                results.extend(split_chinese_sentences(run))
        return results


class DictionaryWordStrategy(SegmentationStrategy):
    """Word-level segmentation of Chinese runs by forward maximum matching."""

    name = "word"

    def __init__(self, words: frozenset | None = None, max_word_length: int = MAX_WORD_LENGTH):
        self.words = frozenset(words) if words is not None else COMMON_WORDS
        self.max_word_length = max_word_length

    def segment(self, text: str, context: StrategyContext) -> list[str]:
        results = []
        for match in CJK_WORD_RUN.finditer(text):
            results.extend(
                forward_maximum_match(match.group(0), self.words, self.max_word_length)
            )
        return results
