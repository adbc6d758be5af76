"""
Markdown Parser
Builds a MarkdownDocument tree from markdown-it-py tokens.
Heading inline content is flattened to plain text except for code spans,
which stay separate so rules can treat them as literal content.
"""
import logging
from typing import List, Optional

from markdown_it import MarkdownIt
from markdown_it.token import Token

from .types import MarkdownBlock, MarkdownBlockType, MarkdownDocument, MarkdownParseResult

logger = logging.getLogger(__name__)

# Container tokens that become blocks. Anything else that opens (table rows,
# cells, sections) is tracked for nesting only.
_CONTAINER_TYPES = {
    'heading_open': MarkdownBlockType.HEADING,
    'paragraph_open': MarkdownBlockType.PARAGRAPH,
    'blockquote_open': MarkdownBlockType.BLOCKQUOTE,
    'bullet_list_open': MarkdownBlockType.UNORDERED_LIST,
    'ordered_list_open': MarkdownBlockType.ORDERED_LIST,
    'list_item_open': MarkdownBlockType.LIST_ITEM,
    'table_open': MarkdownBlockType.TABLE,
}

_LEAF_TYPES = {
    'fence': MarkdownBlockType.CODE_BLOCK,
    'code_block': MarkdownBlockType.CODE_BLOCK,
    'html_block': MarkdownBlockType.HTML_BLOCK,
    'hr': MarkdownBlockType.HORIZONTAL_RULE,
}


class MarkdownParser:
    """CommonMark parser with strikethrough and tables enabled."""

    def __init__(self):
        self.md = MarkdownIt('commonmark').enable(['strikethrough', 'table'])

    def parse(self, content: str, filename: str = "") -> MarkdownParseResult:
        """
        Parse Markdown content into a block tree.

        Args:
            content: Raw Markdown text
            filename: Optional filename recorded on the document

        Returns:
            MarkdownParseResult with the document on success
        """
        if content is None:
            content = ""
        try:
            tokens = self.md.parse(content)
            lines = content.splitlines()
            document = MarkdownDocument(source_file=filename or None)
            self._build_tree(tokens, document, lines)
        except Exception as e:
            logger.error(f"Markdown parsing failed for '{filename}': {e}")
            return MarkdownParseResult(success=False, error=str(e), errors=[str(e)])

        logger.debug(f"🔍 [PARSER-DEBUG] Parsed '{filename}' into {len(document.blocks)} top-level blocks")
        return MarkdownParseResult(success=True, document=document)

    def _build_tree(self, tokens: List[Token], document: MarkdownDocument, lines: List[str]) -> None:
        # None marks an opened token that has no block of its own.
        stack: List[Optional[MarkdownBlock]] = [document]

        for token in tokens:
            if token.nesting == 1:
                block_type = _CONTAINER_TYPES.get(token.type)
                if block_type is None:
                    stack.append(None)
                    continue
                block = self._make_block(token, block_type, lines)
                self._current(stack).children.append(block)
                stack.append(block)
            elif token.nesting == -1:
                stack.pop()
            elif token.type == 'inline':
                self._attach_inline(token, self._current(stack))
            elif token.type in _LEAF_TYPES:
                block = self._make_block(token, _LEAF_TYPES[token.type], lines)
                block.content = token.content
                self._current(stack).children.append(block)

    def _current(self, stack: List[Optional[MarkdownBlock]]) -> MarkdownBlock:
        for block in reversed(stack):
            if block is not None:
                return block
        raise RuntimeError("Markdown block stack lost its document root")

    def _make_block(self, token: Token, block_type: MarkdownBlockType, lines: List[str]) -> MarkdownBlock:
        start_line, end_line = token.map if token.map else (0, 0)
        level = 0
        if block_type == MarkdownBlockType.HEADING:
            level = int(token.tag[1:])
        return MarkdownBlock(
            block_type=block_type,
            content="",
            raw_content="\n".join(lines[start_line:end_line]),
            start_line=start_line + 1,
            level=level
        )

    def _attach_inline(self, token: Token, block: MarkdownBlock) -> None:
        if block.block_type != MarkdownBlockType.HEADING:
            block.content = f"{block.content} {token.content}" if block.content else token.content
            return

        block.children = self._flatten_inline(token.children or [], block.start_line)
        block.content = "".join(child.content for child in block.children)

    def _flatten_inline(self, tokens: List[Token], line: int) -> List[MarkdownBlock]:
        """
        Reduce inline tokens to TEXT and INLINE_CODE spans.
        Emphasis, strong and strike markers disappear; their text stays.
        """
        spans: List[MarkdownBlock] = []

        def add_text(text: str) -> None:
            if not text:
                return
            if spans and spans[-1].block_type == MarkdownBlockType.TEXT:
                spans[-1].content += text
                spans[-1].raw_content += text
            else:
                spans.append(MarkdownBlock(MarkdownBlockType.TEXT, text, text, line))

        for token in tokens:
            if token.type == 'code_inline':
                spans.append(MarkdownBlock(MarkdownBlockType.INLINE_CODE, token.content,
                                           f"{token.markup}{token.content}{token.markup}", line))
            elif token.type in ('text', 'text_special', 'html_inline'):
                add_text(token.content)
            elif token.type == 'image':
                add_text(self._alt_text(token.children or []))
            elif token.type in ('softbreak', 'hardbreak'):
                add_text("\n")
        return spans

    def _alt_text(self, tokens: List[Token]) -> str:
        """Plain text of an image label, without emphasis or code markers."""
        parts = []
        for token in tokens:
            if token.type in ('text', 'text_special', 'code_inline', 'html_inline'):
                parts.append(token.content)
            elif token.type == 'image':
                parts.append(self._alt_text(token.children or []))
            elif token.type in ('softbreak', 'hardbreak'):
                parts.append("\n")
        return "".join(parts)
