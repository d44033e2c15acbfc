"""Tests for the host-facing find_error_branches entry point."""

from concurrent.futures import ThreadPoolExecutor

from foldeb import find_error_branches
from foldeb.engine import ClassifierConfig, ErrorClassifier, FoldingRange, split_lines


PYTHON_SOURCE = '''def load(path):
    if not path:
        raise ValueError("path required")
    data = read(path)
    if data is None:
        logger.error("failed to read %s", path)
        return None
    return parse(data)
'''


class TestSplitLines:
    """Tests for universal newline splitting."""

    def test_mixed_line_endings(self):
        assert split_lines('a\r\nb\nc\rd') == ['a', 'b', 'c', 'd']

    def test_trailing_newline_dropped(self):
        assert split_lines('a\nb\n') == ['a', 'b']

    def test_trailing_blank_line_kept(self):
        assert split_lines('a\n\n') == ['a', '']

    def test_empty_text(self):
        assert split_lines('') == []

    def test_no_newline(self):
        assert split_lines('single') == ['single']


class TestFindErrorBranches:
    """End-to-end tests from text to folding ranges."""

    def test_guarded_return_only(self, guarded_function_source):
        ranges = find_error_branches(guarded_function_source)
        assert ranges == [FoldingRange(start=2, end=2, header_line=1, rule='null_check', category='guard')]

    def test_crlf_input(self, guarded_function_source):
        ranges = find_error_branches(guarded_function_source.replace('\n', '\r\n'))
        assert [(r.start, r.end) for r in ranges] == [(2, 2)]

    def test_accepts_line_sequence(self):
        ranges = find_error_branches(['if (ptr == NULL) {', '    return -1;', '}'])
        assert ranges == [FoldingRange(start=1, end=1, header_line=0, rule='null_check', category='guard')]

    def test_c_source(self, c_source):
        ranges = find_error_branches(c_source)
        assert [(r.start, r.end, r.rule) for r in ranges] == [
            (6, 6, 'null_check'),
            (11, 11, 'null_check'),
            (16, 17, 'threshold_check'),
        ]

    def test_c_source_with_depth_gate(self, c_source):
        classifier = ErrorClassifier(config=ClassifierConfig(depth_gate=True))
        ranges = find_error_branches(c_source, classifier)
        assert [(r.start, r.end) for r in ranges] == [(6, 6), (11, 11), (16, 17)]

    def test_python_source(self):
        ranges = find_error_branches(PYTHON_SOURCE)
        assert [(r.start, r.end, r.rule) for r in ranges] == [
            (2, 2, 'empty_check'),
            (5, 6, 'null_check'),
        ]

    def test_content_only_block(self):
        source = 'function connect() {\n    console.log("failed to connect");\n}\n'
        ranges = find_error_branches(source)
        assert ranges == [FoldingRange(start=1, end=1, header_line=0, rule='log_error', category='log')]

    def test_no_error_handling(self):
        source = 'int add(int a, int b)\n{\n    return a + b;\n}\n'
        assert find_error_branches(source) == []

    def test_fold_start_is_header_line(self, guarded_function_source):
        (folding_range,) = find_error_branches(guarded_function_source)
        assert folding_range.start == folding_range.end == 2
        assert folding_range.fold_start == 1

    def test_fold_start_at_document_start(self):
        (folding_range,) = find_error_branches(['    return -1;', 'x'])
        assert folding_range.header_line is None
        assert folding_range.fold_start == 0

    def test_list_walk_loop_is_not_error_handling(self):
        source = (
            'int count(struct node *p) {\n'
            '    int n = 0;\n'
            '    while (p != NULL) {\n'
            '        n++;\n'
            '        p = p->next;\n'
            '    }\n'
            '    return n;\n'
            '}\n'
        )
        assert find_error_branches(source) == []

    def test_log_call_with_error_named_argument(self):
        source = 'void report(int failures) {\n    printf("processed %d\\n", failures);\n}\n'
        assert find_error_branches(source) == []

    def test_empty_document(self):
        assert find_error_branches('') == []

    def test_malformed_indentation_does_not_fail(self):
        source = '        if (x == NULL) {\n    return -1;\n  }\n}\n'
        ranges = find_error_branches(source)
        assert all(r.start <= r.end for r in ranges)

    def test_concurrent_calls_are_independent(self, c_source):
        classifier = ErrorClassifier()
        expected = find_error_branches(c_source, classifier)
        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(lambda _: find_error_branches(c_source, classifier), range(32)))
        assert all(result == expected for result in results)
