import logging

import click

from logmerge.config import LOG_LEVELS, MODES, load_config
from logmerge.driver import run_merge
from logmerge.errors import LogMergeError
from logmerge.extensions import get_registry, load
from logmerge.hooks import LoggingHooks
from logmerge.sinks import CheckedSink, LogSink, NullSink, StreamSink, format_payload
from logmerge.sources import AsyncFileSource, FileSource, synthetic_sources
from logmerge.sources.synthetic import DEFAULT_START
from logmerge.utils.cli import Timestamp


@click.group()
@click.option(
    "-x",
    multiple=True,
    help="Configuration overrides in key=value form, e.g. -x batch_size=8. "
    "Applied on top of LOGMERGE_* environment variables.",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Level of log messages to show. [default: INFO]",
)
@click.pass_context
def main(ctx, x, log_level):
    """Top level logmerge entry point."""
    try:
        config = load_config(overrides=x).replace(log_level=log_level)
    except (LogMergeError, ValueError) as exc:
        raise click.BadParameter(str(exc), param_hint="-x") from exc

    # install a logging handler before performing any other operations
    logging.basicConfig(
        format="[%(asctime)s-%(levelname)s][%(name)s]\n %(message)s",
        level=config.log_level,
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )
    ctx.obj = config


def mode_option(f):
    return click.option(
        "--mode",
        type=click.Choice(MODES),
        default=None,
        help="Merge with the synchronous or the asynchronous driver. "
        "[default: async]",
    )(f)


def batch_size_option(f):
    return click.option(
        "-b",
        "--batch-size",
        type=click.IntRange(min=1),
        default=None,
        help="Pulls per refill in asynchronous merges. [default: 2]",
    )(f)


def _run(sources, sink, config, hooks=()):
    try:
        return run_merge(
            sources,
            sink,
            mode=config.mode,
            batch_size=config.batch_size,
            hooks=hooks,
        )
    except LogMergeError as exc:
        raise click.ClickException(str(exc)) from exc


@main.command()
@click.argument(
    "paths",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False),
)
@mode_option
@batch_size_option
@click.option(
    "--check-order/--no-check-order",
    default=None,
    help="Fail if the output is not in timestamp order.",
)
@click.option(
    "--sink",
    "sink_name",
    type=click.Choice(get_registry(LogSink).names),
    default="stream",
    show_default=True,
    help="Where merged entries go.",
)
@click.option(
    "-o",
    "--output",
    type=click.File("w", lazy=False),
    default="-",
    help="File to write the merged log to. [default: stdout]",
)
@click.pass_obj
def merge(config, paths, mode, batch_size, check_order, sink_name, output):
    """Merge timestamped log files into one ordered log."""
    config = config.replace(
        mode=mode,
        batch_size=batch_size,
        check_order=check_order,
    )

    source_type = AsyncFileSource if config.mode == "async" else FileSource
    sources = [source_type(path) for path in paths]

    sink = load(LogSink, sink_name, stream=output, formatter=format_payload)
    if config.check_order:
        sink = CheckedSink(sink)

    try:
        _run(sources, sink, config)
    finally:
        for source in sources:
            source.close()


@main.command()
@click.option(
    "-n",
    "--sources",
    "source_count",
    type=click.IntRange(min=0),
    default=10,
    show_default=True,
    help="Number of sources to merge.",
)
@click.option(
    "-e",
    "--entries",
    type=click.IntRange(min=0),
    default=100,
    show_default=True,
    help="Entries per source.",
)
@mode_option
@batch_size_option
@click.option(
    "--max-latency",
    type=click.FloatRange(min=0.0),
    default=0.008,
    show_default=True,
    help="Longest time in seconds an asynchronous pull suspends for.",
)
@click.option(
    "--seed",
    type=int,
    default=None,
    help="Seed for the random sources.",
)
@click.option(
    "--start",
    type=Timestamp(),
    default=DEFAULT_START,
    show_default=True,
    help="Lower bound of the generated timestamps.",
)
@click.option(
    "--show/--no-show",
    default=False,
    show_default=True,
    help="Print the merged entries.",
)
@click.pass_obj
def simulate(
    config,
    source_count,
    entries,
    mode,
    batch_size,
    max_latency,
    seed,
    start,
    show,
):
    """Merge randomly generated sources and report statistics."""
    config = config.replace(mode=mode, batch_size=batch_size)

    kwargs = {"start": start}
    if config.mode == "async":
        kwargs["max_latency"] = max_latency
    sources = synthetic_sources(
        source_count,
        entries,
        seed=seed,
        asynchronous=config.mode == "async",
        **kwargs
    )

    sink = CheckedSink(StreamSink() if show else NullSink())
    hooks = LoggingHooks()
    _run(sources, sink, config, hooks=[hooks])

    stats = sink.stats()
    click.echo("*" * 35)
    click.echo("Mode:\t\t\t%s" % config.mode)
    click.echo("Logs printed:\t\t%d" % stats["printed"])
    click.echo("Time taken (s):\t\t%.3f" % stats["elapsed"])
    click.echo("Logs/s:\t\t\t%.1f" % stats["rate"])
    click.echo("Suspensions:\t\t%d" % hooks.suspensions)
    click.echo("*" * 35)


if __name__ == "__main__":
    main()
