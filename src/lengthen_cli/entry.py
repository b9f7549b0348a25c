#!/usr/bin/env python3
# -*- coding: utf-8 -*-
import asyncio
import logging
import signal
from typing import Optional

import click
import httpx
from prompt_toolkit.application.current import get_app

from rich.panel import Panel
from rich.text import Text

from lengthen_cli import __version__
from lengthen_cli.client import HttpClient
from lengthen_cli.controller import RequestController, SessionState
from lengthen_cli.display import console, print_rule, setup_logging
from lengthen_cli.form import TerminalForm
from lengthen_cli.key_manager import KeyBindingManager, SessionFactory
from lengthen_cli.utils import Config

logger = logging.getLogger(__name__)


# ========== Application Orchestrator ==========
class App:
    def __init__(self, cfg: Config, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.cfg = cfg
        self.form = TerminalForm()
        self.controller = RequestController(HttpClient(cfg, transport=transport), self.form)

        def accept():
            app = get_app()
            buf = app.current_buffer
            app.exit(result=buf.text)

        def clear():
            get_app().exit(exception=KeyboardInterrupt())

        self.kbm = KeyBindingManager(accept_callback=accept, clear_callback=clear)
        self.session = SessionFactory.build_session(self.kbm.bindings)
        self.counter = 1

    async def run(self):
        self._print_banner()

        try:
            while True:
                try:
                    if self.controller.state is SessionState.COMPLETED:
                        await self._prompt(self.form.submit_label, "Enter")
                        self.controller.on_submit_triggered()
                        self.counter += 1
                        continue
                    await self._handle_submit()
                except KeyboardInterrupt:
                    console.print("[warn] Input cancelled.（Ctrl+C）[/warn]")
                    continue
                except EOFError:
                    console.print("\n[info]Exited.（Ctrl+D）[/info]")
                    break
                except Exception as e:
                    logger.debug("Unexpected error", exc_info=True)
                    console.print(Panel.fit(Text(repr(e), no_wrap=False), title="Unexpected error !", border_style="red"))
                    self.counter += 1
                    continue
        finally:
            await self.controller.aclose()

    # ========== Internal helpers ==========
    async def _handle_submit(self):
        url = await self._prompt("url")
        delay = await self._prompt("delay", "seconds, optional")
        duration = await self._prompt("duration", "seconds, optional")
        self.form.fill(url, delay, duration)

        self.controller.on_submit_triggered()
        await self.controller.wait()
        if self.controller.state is SessionState.IDLE:
            self.counter += 1

    async def _prompt(self, field: str, hint: str = "") -> str:
        return await self.session.prompt_async(
            SessionFactory.make_prompt_fragments(self.counter, field, hint)
        )

    def _print_banner(self):
        submit_hint = "、".join(self.kbm.submit_labels) or "Enter"
        print_rule("Start")
        console.print(Panel.fit(
                Text(
                        "Descriptions：\n"
                        f" - Next field / Submit：{submit_hint}\n"
                        " - Cancel：Ctrl+C\n"
                        " - Exit：Ctrl+D\n\n"
                        "Delay and duration are seconds; leave them empty for none.",
                        no_wrap=False
                ),
                title="Help", border_style="cyan"
        ))
        console.print(f"[info]Lengthen service：[/info]{self.cfg.origin}")
        if not self.cfg.verify_tls:
            console.print("[warn] Disable tls verification !（--insecure）[/warn]")


async def shorten_once(cfg: Config, url: str, delay: str = "", duration: str = "",
                       transport: Optional[httpx.AsyncBaseTransport] = None) -> TerminalForm:
    form = TerminalForm(render=False)
    form.fill(url, delay, duration)
    controller = RequestController(HttpClient(cfg, transport=transport), form)
    try:
        controller.on_submit_triggered()
        await controller.wait()
    finally:
        await controller.aclose()
    return form


# ========== CLI with Click ==========

@click.group()
@click.version_option(__version__, prog_name="lengthen-cli")
@click.option("--url", help="Lengthen service address; only its origin is used.")
@click.option("--timeout", type=float, default=None, help="Give up on the request after this many seconds. Waits forever by default.")
@click.option("--insecure", is_flag=True, help="Whether disable tls.")
@click.option("--debug", "-d", is_flag=True, help="Start with debug mode.")
@click.pass_context
def cli(ctx, url, timeout, insecure, debug):
    """
    lengthen-cli: get a lengthened link from the terminal!
    """
    signal.signal(signal.SIGINT, signal.SIG_DFL)
    setup_logging(debug)
    # Simulate argparse.Namespace for Config.init_form_args
    class Args:
        pass
    args = Args()
    args.url = url
    args.timeout = timeout
    args.insecure = insecure
    args.debug = debug
    cfg = Config.init_form_args(args)
    try:
        origin = cfg.origin
    except (ValueError, httpx.InvalidURL) as e:
        raise click.BadParameter(str(e), param_hint="--url")
    logger.debug("Service origin %s", origin)
    ctx.obj = {"cfg": cfg}


@cli.command("run")
@click.pass_context
def run_cmd(ctx):
    """Start the interactive lengthen app."""
    cfg = ctx.obj["cfg"]
    app = App(cfg)
    asyncio.run(app.run())


@cli.command("shorten")
@click.argument("url")
@click.option("--delay", default="", help="Seconds before the link starts working.")
@click.option("--duration", default="", help="Seconds the link keeps working.")
@click.pass_context
def shorten_cmd(ctx, url, delay, duration):
    """Lengthen a single URL and print the result."""
    cfg = ctx.obj["cfg"]
    form = asyncio.run(shorten_once(cfg, url, delay, duration))
    if form.alerts:
        for message, detail in zip(form.alerts, form.alert_details):
            click.echo(message, err=True)
            if detail:
                click.echo(f"  {detail}", err=True)
        ctx.exit(1)
    click.echo(form.output)


def main():
    cli(prog_name="lengthen-cli")


if __name__ == "__main__":
    main()
