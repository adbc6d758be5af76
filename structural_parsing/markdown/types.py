"""
Markdown Structural Parsing Types
Core data structures for Markdown document parsing and analysis.
Headings carry their inline content as child blocks so rules can tell
inline code apart from flattened prose.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional

class MarkdownBlockType(Enum):
    DOCUMENT = "document"
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    BLOCKQUOTE = "blockquote"
    ORDERED_LIST = "ordered_list"
    UNORDERED_LIST = "unordered_list"
    LIST_ITEM = "list_item"
    CODE_BLOCK = "code_block"
    TEXT = "text"
    INLINE_CODE = "inline_code"
    TABLE = "table"
    HORIZONTAL_RULE = "horizontal_rule"
    HTML_BLOCK = "html_block"

@dataclass
class MarkdownBlock:
    """Represents a structural block, or an inline span of a heading."""
    block_type: MarkdownBlockType
    content: str
    raw_content: str
    start_line: int
    level: int = 0
    children: List['MarkdownBlock'] = field(default_factory=list)

    def iter_blocks(self, block_type: Optional[MarkdownBlockType] = None) -> Iterator['MarkdownBlock']:
        """
        Walk descendant blocks depth-first in document order.

        Args:
            block_type: Only yield blocks of this type when given
        """
        for child in self.children:
            if block_type is None or child.block_type == block_type:
                yield child
            yield from child.iter_blocks(block_type)

@dataclass
class MarkdownDocument(MarkdownBlock):
    """Represents the entire Markdown document as the root block."""
    source_file: Optional[str] = None

    def __init__(self, source_file: Optional[str] = None, blocks: Optional[List[MarkdownBlock]] = None):
        super().__init__(
            block_type=MarkdownBlockType.DOCUMENT,
            content="",
            raw_content="",
            start_line=1,
            level=0,
            children=blocks or []
        )
        self.source_file = source_file

    @property
    def blocks(self) -> List[MarkdownBlock]:
        return self.children

@dataclass
class MarkdownParseResult:
    """Result of a Markdown parsing operation."""
    success: bool
    document: Optional[MarkdownDocument] = None
    error: Optional[str] = None
    errors: List[str] = field(default_factory=list)
