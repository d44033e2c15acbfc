"""Pydantic models for API requests and responses"""

from typing import Any

from pydantic import BaseModel, Field

from foldeb.engine import FoldingRange


class HealthResponse(BaseModel):
    """Health check response with system introspection data"""

    status: str = Field(..., examples=['ok'])
    app_version: str = Field(..., examples=['0.1.0'], description='Application version')
    python_version: str = Field(..., examples=['3.13.1'], description='Python interpreter version')
    os_info: dict[str, str] = Field(
        ...,
        examples=[{'system': 'Linux', 'release': '6.8.0', 'version': '#1 SMP', 'machine': 'x86_64'}],
        description='Operating system information',
    )
    system_resources: dict[str, Any] = Field(
        ...,
        examples=[{'cpu_cores': 8, 'cpu_cores_physical': 4, 'ram_total_gb': 16.0, 'ram_available_gb': 8.5}],
        description='System resources (CPU cores and RAM)',
    )
    python_packages: dict[str, str] = Field(
        default_factory=dict,
        examples=[{'fastapi': '0.115.6', 'pydantic': '2.11.0', 'uvicorn': '0.34.0'}],
        description='Key Python package versions',
    )
    constants: dict[str, Any] = Field(
        default_factory=dict,
        examples=[{'LOG_LEVEL': 'INFO', 'DEPTH_GATE': False, 'DEPTH_THRESHOLD': 4}],
        description='Effective engine configuration',
    )
    supported_languages: list[str] = Field(default_factory=list, description='Language ids the engine is run for')


class FoldRequest(BaseModel):
    """Document to search for error-handling branches

    Attributes:
        text: Full document text (\\n, \\r\\n and \\r line endings accepted)
        language: Optional language id; must be a supported language if given
        depth_gate: Override the server's depth gate setting
        depth_threshold: Override the server's depth threshold
    """

    text: str = Field(..., examples=['if (p == NULL) {\n    return -1;\n}\n'], description='Document text')
    language: str | None = Field(None, examples=['c'], description='Language id of the document')
    depth_gate: bool | None = Field(None, description='Reject shallow blocks unless labelled')
    depth_threshold: int | None = Field(None, ge=0, examples=[4], description='Deepest indentation treated as shallow')


class FoldingRangeResult(BaseModel):
    """A foldable error-handling block

    Editors should collapse `fold_start`..`end`. `start`..`end` is the
    block body alone and is a single line for one-line blocks.

    Attributes:
        start: First line of the block (0-based)
        end: Last line of the block (0-based, inclusive)
        fold_start: Line to fold from (the header line, or start at document start)
        header_line: Line before the block, kept visible when folded
        rule: Name of the rule that accepted the block
        category: Rule category (guard, keyword, log)
    """

    start: int = Field(..., examples=[1], description='First line of the block (0-based)')
    end: int = Field(..., examples=[1], description='Last line of the block (0-based, inclusive)')
    fold_start: int = Field(..., examples=[0], description='Line to fold from; collapse fold_start..end')
    header_line: int | None = Field(None, examples=[0], description='Line kept visible when folded')
    rule: str = Field(..., examples=['null_check'])
    category: str = Field(..., examples=['guard'])

    @classmethod
    def from_range(cls, folding_range: FoldingRange) -> 'FoldingRangeResult':
        return cls(
            start=folding_range.start,
            end=folding_range.end,
            fold_start=folding_range.fold_start,
            header_line=folding_range.header_line,
            rule=folding_range.rule,
            category=folding_range.category,
        )


class FoldResponse(BaseModel):
    """Error-handling branches found in a document"""

    ranges: list[FoldingRangeResult] = Field(default_factory=list)
    count: int = Field(..., examples=[1], description='Number of ranges found')
    line_count: int = Field(..., examples=[3], description='Number of lines in the document')
    language: str | None = Field(None, examples=['c'])
    time: float = Field(..., examples=[0.001], description='Processing time in seconds')


class FileScanResponse(BaseModel):
    """Ranges found in a single file"""

    path: str
    language: str | None = None
    line_count: int
    ranges: list[FoldingRangeResult] = Field(default_factory=list)


class ScanResponse(BaseModel):
    """Result of scanning files and directories."""

    files: list[FileScanResponse] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)
    errors: list[dict[str, str]] = Field(default_factory=list)
    count: int = Field(..., description='Total number of ranges found')
    total_time: float = Field(..., description='Scan time in seconds')

    def to_cli(self, show_lines: dict[str, list[str]] | None = None, colorize: bool = False) -> str:
        """Format scan response for CLI output.

        Args:
            show_lines: Optional mapping of path to its lines; when given, the
                header line of every range is printed next to it.
            colorize: Emit ANSI colors.
        """
        CYAN = '\033[36m'
        YELLOW = '\033[33m'
        GREY = '\033[90m'
        RESET = '\033[0m'

        lines = []
        for file_result in self.files:
            if not file_result.ranges:
                continue
            if colorize:
                lines.append(f'{CYAN}{file_result.path}{RESET}')
            else:
                lines.append(file_result.path)

            file_lines = (show_lines or {}).get(file_result.path)
            for item in file_result.ranges:
                # Human-facing line numbers are 1-based
                span = f'{item.start + 1}-{item.end + 1}'
                reason = f'{item.category}: {item.rule}'
                if colorize:
                    entry = f'  {YELLOW}{span}{RESET} {GREY}({reason}){RESET}'
                else:
                    entry = f'  {span} ({reason})'
                if file_lines is not None and item.header_line is not None and item.header_line < len(file_lines):
                    entry += f'  {file_lines[item.header_line].strip()}'
                lines.append(entry)

        if self.count:
            files_with_ranges = sum(1 for file_result in self.files if file_result.ranges)
            lines.append(f'Found {self.count} error-handling branches in {files_with_ranges} files')
        else:
            lines.append('No error-handling branches found')

        return '\n'.join(lines)
