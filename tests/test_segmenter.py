"""Unit tests for indentation-based block segmentation."""

from foldeb.engine import CodeBlock, get_indent_level, is_skippable, segment, split_lines


class TestIndentLevel:
    """Tests for get_indent_level."""

    def test_spaces(self):
        assert get_indent_level('    return -1;') == 4

    def test_tabs_count_as_one(self):
        assert get_indent_level('\t\treturn -1;') == 2

    def test_mixed_whitespace(self):
        assert get_indent_level('\t  x') == 3

    def test_no_indent(self):
        assert get_indent_level('int main()') == 0


class TestIsSkippable:
    """Tests for is_skippable."""

    def test_blank_and_whitespace_only(self):
        assert is_skippable('')
        assert is_skippable('    \t')

    def test_comment(self):
        assert is_skippable('    // return -1;')

    def test_preprocessor(self):
        assert is_skippable('#ifdef DEBUG')

    def test_code_line(self):
        assert not is_skippable('    return -1;')

    def test_custom_markers(self):
        assert not is_skippable('# python comment', markers=('//',))


class TestSegment:
    """Tests for segment."""

    def test_nested_function(self, guarded_function_source):
        lines = split_lines(guarded_function_source)
        blocks = segment(lines)
        assert blocks == [
            CodeBlock(start_line=2, end_line=2, indent_level=4),
            CodeBlock(start_line=1, end_line=4, indent_level=2),
        ]

    def test_emitted_in_closing_order(self):
        lines = ['a', '  b', '    c', '  d', 'e']
        assert segment(lines) == [
            CodeBlock(start_line=2, end_line=2, indent_level=4),
            CodeBlock(start_line=1, end_line=3, indent_level=2),
        ]

    def test_one_pop_per_decrease(self):
        lines = [
            'a',
            '  b',
            '    c',
            '      d',
            'e',
        ]
        blocks = segment(lines)
        # Only the innermost block closes: one pop per decrease
        assert blocks == [CodeBlock(start_line=3, end_line=3, indent_level=6)]

    def test_multi_level_jump_is_one_block(self):
        blocks = segment(['a', '        b', 'c'])
        assert blocks == [CodeBlock(start_line=1, end_line=1, indent_level=8)]

    def test_trailing_open_block_not_emitted(self):
        assert segment(['a', '    b', '    c']) == []

    def test_flat_input_has_no_blocks(self):
        assert segment(['a', 'b', 'c']) == []

    def test_empty_input(self):
        assert segment([]) == []

    def test_pop_on_empty_stack_is_noop(self):
        lines = ['        a', '    b', 'c']
        blocks = segment(lines)
        # The second decrease finds nothing to close
        assert blocks == [CodeBlock(start_line=0, end_line=0, indent_level=8)]

    def test_comments_and_preprocessor_lines_skipped(self):
        lines = ['a', '    b', '// note', '#define X 1', 'd']
        blocks = segment(lines)
        # The block ends on the line before the dedent, skipped lines included
        assert blocks == [CodeBlock(start_line=1, end_line=3, indent_level=4)]

    def test_unindented_comment_does_not_close_block(self):
        lines = ['a', '    b', '// note', '    c', 'd']
        blocks = segment(lines)
        assert blocks == [CodeBlock(start_line=1, end_line=3, indent_level=4)]

    def test_blank_lines_skipped(self):
        lines = ['a', '    b', '', '    c', 'd']
        assert segment(lines) == [CodeBlock(start_line=1, end_line=3, indent_level=4)]

    def test_deterministic(self, c_source):
        lines = split_lines(c_source)
        assert segment(lines) == segment(lines)

    def test_ranges_well_formed(self, c_source):
        lines = split_lines(c_source)
        blocks = segment(lines)
        assert blocks
        for block in blocks:
            assert block.start_line <= block.end_line
            assert 0 <= block.start_line < len(lines)
            assert block.end_line < len(lines)

    def test_c_source_blocks(self, c_source):
        blocks = segment(split_lines(c_source))
        assert [(b.start_line, b.end_line, b.indent_level) for b in blocks] == [
            (6, 6, 8),
            (11, 11, 8),
            (16, 17, 8),
            (2, 22, 4),
            (24, 25, 4),
        ]


class TestCodeBlock:
    """Tests for CodeBlock helpers."""

    def test_with_columns(self):
        lines = ['if (p == NULL) {', '    return -1;', '}']
        block = CodeBlock(start_line=1, end_line=1, indent_level=4).with_columns(lines)
        assert block.start_column == 0
        assert block.end_column == len('    return -1;')
        assert block.indent_level == 4

    def test_with_columns_out_of_range(self):
        block = CodeBlock(start_line=1, end_line=5, indent_level=4).with_columns(['a', 'b'])
        assert block.end_column == 0

    def test_line_count(self):
        assert CodeBlock(start_line=2, end_line=4, indent_level=4).line_count == 3
