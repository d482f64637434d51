"""Command-line interface for the frame pipeline simulator."""

import json
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from framesim.core.constants import SWEEPABLE_PARAMETERS

app = typer.Typer(
    name="framesim",
    help="Frame Pipeline Timing Simulator",
    add_completion=False,
)
console = Console()

INTEGER_PARAMETERS = {"command_count", "buffer_capacity", "max_frames_ahead"}


def _build_parameters(
    runner,
    script_time: float | None,
    command_count: int | None,
    generation_factor: float | None,
    processing_factor: float | None,
    buffer_capacity: int | None,
    max_frames_ahead: int | None,
):
    """Apply CLI overrides to the configured defaults.

    Buffer capacity is applied before command count, so an explicit
    command count always wins and grows the buffer if needed.
    """
    params = runner.default_parameters()
    requested_commands = params.command_count
    if buffer_capacity is not None:
        params = params.with_buffer_capacity(buffer_capacity)
    if command_count is not None:
        params = params.with_command_count(command_count)
    if buffer_capacity is not None and params.buffer_capacity != buffer_capacity:
        console.print(
            f"[yellow]Buffer capacity raised to {params.buffer_capacity} "
            f"to fit {params.command_count} commands[/yellow]"
        )
    elif command_count is None and params.command_count < requested_commands:
        console.print(f"[yellow]Command count limited to buffer capacity {buffer_capacity}[/yellow]")

    others = {
        "script_time": script_time,
        "generation_factor": generation_factor,
        "processing_factor": processing_factor,
        "max_frames_ahead": max_frames_ahead,
    }
    return params.with_updates(**{k: v for k, v in others.items() if v is not None})


def _frames_table(result) -> Table:
    table = Table(title="Frame Timeline (ms)")
    for column in (
        "Frame", "Wait (ahead)", "Wait (buffer)", "Script", "Render",
        "GPU", "GPU idle", "GPU wait", "Buffer",
    ):
        table.add_column(column, justify="right")

    for f in result.frames:
        buffer = f"{f.buffer_use}"
        if f.buffer_overflow:
            buffer = f"[red]{buffer}![/red]"
        table.add_row(
            str(f.index),
            f"{f.wait_frames_ahead:.3f}",
            f"{f.wait_buffer:.3f}",
            f"{f.script_start:.3f}-{f.script_end:.3f}",
            f"{f.render_start:.3f}-{f.render_end:.3f}",
            f"{f.gpu_start:.3f}-{f.gpu_end:.3f}",
            f"{f.gpu_idle:.3f}",
            f"{f.gpu_wait:.3f}",
            buffer,
        )
    return table


def _metrics_table(obs) -> Table:
    table = Table(title="Metrics")
    table.add_column("Metric")
    table.add_column("Value")
    table.add_row("Frame time", f"{obs.frame_time:.2f} ms")
    table.add_row("FPS", f"{obs.fps:.1f}")
    table.add_row("Bottleneck", f"{obs.bottleneck.label} ({obs.bottleneck.value})")
    table.add_row("Peak buffer use", f"{obs.peak_buffer_occupancy:,} / {obs.buffer_capacity:,}")
    table.add_row("Frames in flight", f"{obs.frames_in_flight} / {obs.max_frames_ahead}")
    table.add_row("Input latency", f"{obs.input_latency:.2f} ms")
    return table


@app.command()
def run(
    script_time: Annotated[Optional[float], typer.Option(min=0, help="CPU script time per frame (ms)")] = None,
    command_count: Annotated[Optional[int], typer.Option(min=0, help="Render commands per frame")] = None,
    generation_factor: Annotated[Optional[float], typer.Option(min=0, help="CPU ms per command")] = None,
    processing_factor: Annotated[Optional[float], typer.Option(min=0, help="GPU ms per command")] = None,
    buffer_capacity: Annotated[Optional[int], typer.Option(min=0, help="Command buffer capacity")] = None,
    max_frames_ahead: Annotated[Optional[int], typer.Option(min=1, help="Max frames CPU runs ahead")] = None,
    frames: Annotated[Optional[int], typer.Option(min=2, help="Frames to simulate")] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
    output: Annotated[Optional[Path], typer.Option(help="Output JSON file")] = None,
    plot: Annotated[bool, typer.Option(help="Show timeline plot")] = False,
    plot_file: Annotated[Optional[Path], typer.Option(help="Save timeline plot to file")] = None,
):
    """Simulate a window of frames and show the timeline and metrics."""
    from framesim.simulation.runner import SimulationRunner

    runner = SimulationRunner()
    params = _build_parameters(
        runner, script_time, command_count, generation_factor,
        processing_factor, buffer_capacity, max_frames_ahead,
    )
    result = runner.run(params, frame_count=frames)

    if json_output:
        typer.echo(json.dumps(result.to_dict(), indent=2, default=str))
    else:
        console.print(Panel.fit(result.explanation, title="Configuration"))
        console.print(_frames_table(result))
        console.print(_metrics_table(result.observables))

    if output:
        result.save(output)
        console.print(f"[green]Results saved to {output}[/green]")

    if plot or plot_file:
        from framesim.viz.plots import plot_timeline
        import matplotlib.pyplot as plt

        fig = plot_timeline(result, settings=runner.settings.plot, save_path=plot_file)
        if plot_file:
            console.print(f"[green]Timeline saved to {plot_file}[/green]")
        if plot:
            plt.show()
        plt.close(fig)


@app.command()
def sweep(
    parameter: Annotated[str, typer.Argument(help=f"One of: {', '.join(SWEEPABLE_PARAMETERS)}")],
    start: Annotated[float, typer.Option(help="First value")],
    stop: Annotated[float, typer.Option(help="Last value")],
    steps: Annotated[int, typer.Option(min=2, help="Number of values")] = 10,
    frames: Annotated[Optional[int], typer.Option(min=2, help="Frames per run")] = None,
    plot_file: Annotated[Optional[Path], typer.Option(help="Save sweep plot to file")] = None,
):
    """Vary one parameter and tabulate frame time, FPS and bottleneck."""
    import numpy as np

    from framesim.simulation.runner import SimulationRunner

    if parameter not in SWEEPABLE_PARAMETERS:
        console.print(f"[red]Unknown parameter: {parameter}[/red]")
        raise typer.Exit(code=1)

    values = np.linspace(start, stop, steps)
    if parameter in INTEGER_PARAMETERS:
        values = np.unique(np.rint(values).astype(int))

    runner = SimulationRunner(log_fn=lambda msg: None)
    try:
        points = runner.run_sweep(parameter, values.tolist(), frame_count=frames)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)

    table = Table(title=f"Sweep: {parameter}")
    table.add_column(parameter, justify="right")
    table.add_column("Frame time", justify="right")
    table.add_column("FPS", justify="right")
    table.add_column("Latency", justify="right")
    table.add_column("Bottleneck")
    for point in points:
        obs = point.observables
        table.add_row(
            f"{point.value:g}",
            f"{obs.frame_time:.2f} ms",
            f"{obs.fps:.1f}",
            f"{obs.input_latency:.2f} ms",
            obs.bottleneck.label,
        )
    console.print(table)

    if plot_file:
        from framesim.viz.plots import plot_sweep
        import matplotlib.pyplot as plt

        fig = plot_sweep(points, parameter, save_path=plot_file)
        plt.close(fig)
        console.print(f"[green]Sweep plot saved to {plot_file}[/green]")


@app.command()
def version():
    """Show version information."""
    from framesim import __version__
    console.print(f"framesim v{__version__}")


if __name__ == "__main__":
    app()
