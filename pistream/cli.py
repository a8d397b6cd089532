import logging
import os
import subprocess
import sys
import time
import webbrowser

import click

from .config import DEFAULT_OUTPUT, parse_digit_count
from .pipeline import compute_pi_to_file
from .verify import check_output_format, preview, verify_output


class DigitCount(click.ParamType):
    name = "digits"

    def convert(self, value, param, ctx):
        if isinstance(value, int):
            return value
        try:
            return parse_digit_count(value)
        except ValueError as e:
            self.fail(str(e), param, ctx)


def _configure_logging(verbose: int):
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _run_app(host: str, port: int, open_browser: bool):
    url = f"http://{host}:{port}"
    cmd = [
        sys.executable,
        "-m",
        "streamlit",
        "run",
        os.path.join(os.path.dirname(__file__), "streamlit_app.py"),
        "--server.address",
        host,
        "--server.port",
        str(port),
    ]
    proc = subprocess.Popen(cmd)
    if open_browser:
        for _ in range(60):
            time.sleep(0.2)
            try:
                webbrowser.open(url)
                break
            except webbrowser.Error:
                pass
    raise SystemExit(proc.wait())


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
def main():
    pass


@main.command(context_settings={"ignore_unknown_options": True})
@click.argument("threads", type=int)
@click.argument("digits", type=DigitCount())
@click.argument("output", default=DEFAULT_OUTPUT, required=False)
@click.option("--block-size", default=None, type=int, help="Digits per streamed block (default: sized from digits and threads).")
@click.option("--strategy", type=click.Choice(["partition", "tasks"], case_sensitive=False), default="partition", show_default=True)
@click.option("--executor", "executor_kind", type=click.Choice(["process", "thread"], case_sensitive=False), default="process", show_default=True)
@click.option("--verify/--no-verify", default=False, show_default=True)
@click.option("--verify-samples", default=1000, show_default=True, type=int)
@click.option("--preview", "preview_chars", default=0, show_default=True, type=int)
@click.option("-v", "--verbose", count=True)
def run(
    threads: int,
    digits: int,
    output: str,
    block_size: int,
    strategy: str,
    executor_kind: str,
    verify: bool,
    verify_samples: int,
    preview_chars: int,
    verbose: int,
):
    """Stream DIGITS decimals of Pi into OUTPUT using THREADS workers."""
    _configure_logging(verbose)
    try:
        report = compute_pi_to_file(
            digits,
            threads,
            output,
            block_size=block_size,
            strategy=strategy,
            executor_kind=executor_kind,
        )
    except OSError as e:
        raise click.ClickException(f"cannot write {output}: {e}")
    if not report.complete:
        raise click.ClickException(f"only {report.blocks_written} of {report.blocks} blocks reached {report.path}")
    click.echo(report.path)
    click.echo(f"Terms: {report.terms}, precision: {report.precision_bits} bits, blocks: {report.blocks} x {report.block_size}")
    click.echo(f"Execution time: {report.elapsed_text}")
    if preview_chars > 0:
        head, tail = preview(report.path, preview_chars)
        click.echo(f"{head}...{tail}")
    if verify:
        if not check_output_format(report.path, report.digits):
            raise click.ClickException("verification failed (format)")
        ok, checked = verify_output(report.path, verify_samples)
        if not ok:
            raise click.ClickException("verification failed (pi spigot)")
        click.echo(f"verified {checked} digits")


@main.command("preview")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--chars", default=50, show_default=True, type=int)
def preview_cmd(path: str, chars: int):
    head, tail = preview(path, chars)
    click.echo(head)
    click.echo(tail)


@main.command("verify")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--samples", default=1000, show_default=True, type=int)
def verify_cmd(path: str, samples: int):
    ok, checked = verify_output(path, samples)
    if not ok:
        raise click.ClickException(f"verification failed after {checked} digits")
    click.echo(f"verified {checked} digits")


@main.command()
@click.option("--host", default="localhost", show_default=True)
@click.option("--port", default=8501, show_default=True, type=int)
@click.option("--open/--no-open", default=True, show_default=True)
def app(host: str, port: int, open: bool):
    _run_app(host, port, open)
