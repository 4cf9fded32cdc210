"""
Command-line interface for converting BusinessWorks projects.

Subcommands:
    convert   Parse processes/schemas and write Spring Boot sources
    validate  Run the structural checks only
    analyze   Summarise what a conversion would work from
"""

from __future__ import annotations

import argparse
import sys
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from . import __version__
from .codegen import (
    GeneratedFile,
    GenerationConfig,
    PROCESS_MODEL,
    SCHEMA_MODEL,
    create_default_registry,
    generate_code,
    load_config,
)
from .codegen.core.config import validate_config
from .codegen.spring.endpoints import synthesize_endpoints
from .diagnostics import ConverterError, Diagnostic
from .logging_config import get_logger, setup_logging
from .parsers import ParserConfig, ProcessParser, SchemaParser
from .utils import (
    CONVERTIBLE_EXTENSIONS,
    find_convertible_files,
    is_process_file,
    is_schema_file,
    read_text,
    write_generated_files,
)

logger = get_logger(__name__)


class CLIError(ConverterError):
    """Exception raised for CLI-related errors."""

    pass


@dataclass
class FileReport:
    """What happened to one input file."""

    path: Path
    kind: str
    files: List[GeneratedFile] = field(default_factory=list)
    warnings: List[Diagnostic] = field(default_factory=list)
    errors: List[Diagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-v", "--verbose", action="store_true", help="Verbose output and debug logging"
    )

    parser = argparse.ArgumentParser(
        prog="tibco-converter",
        description="Convert TIBCO BusinessWorks processes and XSDs to Spring Boot code",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    convert = subparsers.add_parser(
        "convert", parents=[common], help="Generate Spring Boot sources"
    )
    convert.add_argument("input", metavar="INPUT", help="Process/XSD file or directory")
    convert.add_argument("-o", "--output", metavar="DIR", help="Output directory")
    convert.add_argument("-p", "--package", metavar="PKG", help="Base Java package")
    convert.add_argument("--spring-version", metavar="V", help="Target Spring Boot version")
    convert.add_argument("--config", metavar="FILE", help="JSON configuration file")
    convert.add_argument(
        "--no-controllers", action="store_true", help="Don't generate controllers"
    )
    convert.add_argument("--no-dtos", action="store_true", help="Don't generate DTOs")
    convert.add_argument("--no-lombok", action="store_true", help="Don't use Lombok")
    convert.add_argument(
        "--no-validation", action="store_true", help="Don't add validation annotations"
    )
    convert.add_argument(
        "--dry-run", action="store_true", help="Show what would be generated without writing"
    )

    validate = subparsers.add_parser(
        "validate", parents=[common], help="Check files without converting"
    )
    validate.add_argument("input", metavar="INPUT", help="Process/XSD file or directory")

    analyze = subparsers.add_parser(
        "analyze", parents=[common], help="Summarise processes and schemas"
    )
    analyze.add_argument("input", metavar="INPUT", help="Process/XSD file or directory")

    return parser


def build_config(args: Any) -> GenerationConfig:
    """Merge defaults, the optional config file and command-line overrides."""
    overrides: dict = {}
    if getattr(args, "output", None):
        overrides["output_dir"] = args.output
    if getattr(args, "package", None):
        overrides["package_name"] = args.package
    if getattr(args, "spring_version", None):
        overrides["spring_boot_version"] = args.spring_version

    options = {}
    if getattr(args, "no_controllers", False):
        options["generate_controllers"] = False
    if getattr(args, "no_dtos", False):
        options["generate_dtos"] = False
    if getattr(args, "no_lombok", False):
        options["use_lombok"] = False
    if getattr(args, "no_validation", False):
        options["use_validation"] = False
    if options:
        overrides["options"] = options

    return load_config(overrides, getattr(args, "config", None))


class CLIHandler:
    """Handle command-line operations."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()
        self.registry = create_default_registry()
        logger.debug("CLIHandler initialized")

    def run(self, args: Any) -> int:
        """Run a parsed command.

        Returns:
            Exit code: 1 when any file produced an error, else 0
        """
        handlers = {
            "convert": self.convert,
            "validate": self.validate,
            "analyze": self.analyze,
        }
        try:
            return handlers[args.command](args)
        except (ConverterError, FileNotFoundError) as e:
            self.console.print(f"❌ [red]{escape(str(e))}[/red]")
            logger.error("%s failed: %s", args.command, e)
            return 1

    def _input_files(self, input_path: str) -> List[Path]:
        files = find_convertible_files(input_path)
        if not files:
            raise CLIError(
                f"No convertible files found in {input_path} "
                f"(expected {', '.join(CONVERTIBLE_EXTENSIONS)})"
            )
        return files

    def _parser_config(self, args: Any) -> ParserConfig:
        return ParserConfig(verbose=getattr(args, "verbose", False))

    def _read_source(self, path: Path, report: FileReport) -> Optional[str]:
        """Read an input file, recording a failure on its report."""
        try:
            return read_text(path)
        except (ConverterError, OSError) as e:
            logger.debug("Could not read %s: %s", path, e)
            report.errors.append(Diagnostic(str(e), str(path), "READ_ERROR"))
            return None

    def _unsupported(self, path: Path) -> FileReport:
        report = FileReport(path=path, kind="unknown")
        report.errors.append(
            Diagnostic(
                f"Unsupported file type: {path.suffix or path.name}",
                str(path),
                "UNSUPPORTED_FILE_TYPE",
            )
        )
        return report

    # convert

    def convert(self, args: Any) -> int:
        config = build_config(args)
        for warning in validate_config(config):
            self.console.print(f"⚠️  [yellow]{warning}[/yellow]")

        files = self._input_files(args.input)
        reports: List[FileReport] = []

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=self.console,
            transient=True,
        ) as progress:
            task = progress.add_task("Converting...", total=len(files))
            for path in files:
                progress.update(task, description=f"Converting {path.name}")
                reports.append(self._convert_file(path, config, args))
                progress.advance(task)

        if not args.dry_run:
            for report in reports:
                if report.files:
                    write_generated_files(report.files, config.output_dir)

        self._print_conversion_summary(reports, config, args.dry_run)
        return 0 if all(r.ok for r in reports) else 1

    def _convert_file(self, path: Path, config: GenerationConfig, args: Any) -> FileReport:
        if is_process_file(path):
            report = FileReport(path=path, kind=PROCESS_MODEL)
            parser = ProcessParser(self._parser_config(args))
        elif is_schema_file(path):
            report = FileReport(path=path, kind=SCHEMA_MODEL)
            parser = SchemaParser(self._parser_config(args))
        else:
            return self._unsupported(path)

        text = self._read_source(path, report)
        if text is None:
            return report

        result = parser.parse(text)
        report.warnings.extend(result.warnings)
        report.errors.extend(result.errors)
        if not result.success:
            return report

        for name in self.registry.generators_for(report.kind, config.options):
            generator = self.registry.create_generator(
                name, verbose=getattr(args, "verbose", False)
            )
            generated = generate_code(generator, result.data, config)
            report.files.extend(generated.files)
            report.warnings.extend(generated.warnings)
            report.errors.extend(generated.errors)

        return report

    def _print_conversion_summary(
        self, reports: List[FileReport], config: GenerationConfig, dry_run: bool
    ) -> None:
        table = Table(title="Conversion Results", box=box.ROUNDED)
        table.add_column("File", style="cyan")
        table.add_column("Kind")
        table.add_column("Generated", justify="right")
        table.add_column("Warnings", justify="right", style="yellow")
        table.add_column("Errors", justify="right", style="red")
        table.add_column("Status")

        for report in reports:
            table.add_row(
                str(report.path),
                report.kind,
                str(len(report.files)),
                str(len(report.warnings)),
                str(len(report.errors)),
                "[green]✓[/green]" if report.ok else "[red]✗[/red]",
            )
        self.console.print(table)
        self._print_diagnostics(reports)

        generated = [f for r in reports for f in r.files]
        if dry_run:
            for generated_file in generated:
                self.console.print(f"  [dim]would write[/dim] {generated_file.path}")

        action = "Would generate" if dry_run else "Generated"
        self.console.print(
            Panel(
                f"{action} {len(generated)} file(s) in {config.output_dir}\n"
                f"Package: {config.package_name}  Spring Boot: {config.spring_boot_version}",
                title="Summary",
                border_style="green" if all(r.ok for r in reports) else "red",
            )
        )

    def _print_diagnostics(self, reports: List[FileReport]) -> None:
        for report in reports:
            for error in report.errors:
                self.console.print(
                    f"[red]✗ {escape(report.path.name)}: {escape(str(error))}[/red]"
                )
            for warning in report.warnings:
                self.console.print(
                    f"[yellow]⚠ {escape(report.path.name)}: {escape(str(warning))}[/yellow]"
                )

    # validate

    def validate(self, args: Any) -> int:
        reports = []
        for path in self._input_files(args.input):
            if is_process_file(path):
                parser = ProcessParser(self._parser_config(args))
                kind = PROCESS_MODEL
            elif is_schema_file(path):
                parser = SchemaParser(self._parser_config(args))
                kind = SCHEMA_MODEL
            else:
                reports.append(self._unsupported(path))
                continue

            report = FileReport(path=path, kind=kind)
            reports.append(report)
            text = self._read_source(path, report)
            if text is None:
                continue
            result = parser.validate(text)
            report.warnings.extend(result.warnings)
            report.errors.extend(result.errors)

        table = Table(title="Validation Results", box=box.ROUNDED)
        table.add_column("File", style="cyan")
        table.add_column("Kind")
        table.add_column("Status")
        for report in reports:
            status = "[green]✓ valid[/green]" if report.ok else "[red]✗ invalid[/red]"
            table.add_row(str(report.path), report.kind, status)
        self.console.print(table)
        self._print_diagnostics(reports)

        return 0 if all(r.ok for r in reports) else 1

    # analyze

    def analyze(self, args: Any) -> int:
        failed = False
        for path in self._input_files(args.input):
            if is_process_file(path):
                failed |= not self._analyze_process(path, args)
            elif is_schema_file(path):
                failed |= not self._analyze_schema(path, args)
            else:
                self._print_diagnostics([self._unsupported(path)])
                failed = True
        return 1 if failed else 0

    def _analyze_process(self, path: Path, args: Any) -> bool:
        report = FileReport(path, PROCESS_MODEL)
        text = self._read_source(path, report)
        if text is None:
            self._print_diagnostics([report])
            return False

        result = ProcessParser(self._parser_config(args)).parse(text)
        report.warnings.extend(result.warnings)
        report.errors.extend(result.errors)
        if not result.success:
            self._print_diagnostics([report])
            return False

        process = result.data
        table = Table(title=f"Process: {process.name}", box=box.SIMPLE)
        table.add_column("Activity kind", style="cyan")
        table.add_column("Count", justify="right")
        for kind, count in sorted(Counter(a.kind.value for a in process.activities).items()):
            table.add_row(kind, str(count))
        self.console.print(table)
        self.console.print(
            f"📊 {len(process.activities)} activities, {len(process.transitions)} transitions"
        )

        for endpoint in synthesize_endpoints(process):
            self.console.print(
                f"  🌐 {endpoint.method} {endpoint.path} -> {endpoint.method_name}"
                f"({endpoint.request_type}): {endpoint.response_type}"
            )

        self._print_diagnostics([report])
        return True

    def _analyze_schema(self, path: Path, args: Any) -> bool:
        report = FileReport(path, SCHEMA_MODEL)
        text = self._read_source(path, report)
        if text is None:
            self._print_diagnostics([report])
            return False

        result = SchemaParser(self._parser_config(args)).parse(text)
        report.warnings.extend(result.warnings)
        report.errors.extend(result.errors)
        if not result.success:
            self._print_diagnostics([report])
            return False

        schema = result.data
        table = Table(title=f"Schema: {path.name}", box=box.SIMPLE)
        table.add_column("Item", style="cyan")
        table.add_column("Count", justify="right")
        table.add_row("Elements", str(len(schema.elements)))
        table.add_row("Complex types", str(len(schema.complex_types)))
        table.add_row("Simple types", str(len(schema.simple_types)))
        table.add_row("Imports", str(len(schema.imports)))
        self.console.print(table)
        if schema.target_namespace:
            self.console.print(f"  Target namespace: {schema.target_namespace}")

        self._print_diagnostics([report])
        return True


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the ``tibco-converter`` command."""
    parser = create_parser()
    args = parser.parse_args(argv)
    setup_logging(verbose=args.verbose)
    return CLIHandler().run(args)


if __name__ == "__main__":
    sys.exit(main())
