"""CLI：模块与依赖管理命令（init / get / remove / tidy / list）"""

from __future__ import annotations

import click

from bendpm.cli import _pm, user_errors


def register(group: click.Group) -> None:
    group.add_command(init)
    group.add_command(get)
    group.add_command(remove)
    group.add_command(tidy)
    group.add_command(list_deps)


@click.command()
@click.argument("name")
@click.pass_context
def init(ctx: click.Context, name: str) -> None:
    """初始化模块清单 mod.toml"""
    pm = _pm(ctx)
    with user_errors():
        manifest = pm.init(name)
    click.echo(f"已创建: {manifest.path}")


@click.command()
@click.argument("name")
@click.argument("version", required=False)
@click.option("--alias", "-a", default=None, help="依赖别名（本地目录名）")
@click.pass_context
def get(ctx: click.Context, name: str, version: str | None, alias: str | None) -> None:
    """添加依赖（不指定版本时使用最新的语义化版本 tag）"""
    pm = _pm(ctx)
    with user_errors():
        dep = pm.add(name, version, alias)
    click.echo(f"就绪: {dep.name}@{dep.version} -> {dep.path}")


@click.command()
@click.argument("name")
@click.pass_context
def remove(ctx: click.Context, name: str) -> None:
    """移除依赖及其本地镜像"""
    pm = _pm(ctx)
    with user_errors():
        path = pm.remove(name)
    click.echo(f"已移除: {name}")
    if path is not None:
        click.echo(f"已删除镜像: {path}")


@click.command()
@click.pass_context
def tidy(ctx: click.Context) -> None:
    """清理未使用的依赖（尚未实现）"""
    pm = _pm(ctx)
    with user_errors():
        pm.tidy()


@click.command(name="list")
@click.pass_context
def list_deps(ctx: click.Context) -> None:
    """列出清单中的依赖"""
    pm = _pm(ctx)
    with user_errors():
        deps = pm.list_dependencies()
    if not deps:
        click.echo("未定义任何依赖。")
        return
    for d in deps:
        alias = f" (alias={d.spec.alias})" if d.spec.alias else ""
        mark = "" if d.present else "  [未获取]"
        click.echo(f"  {d.spec.name:40s} {d.spec.version:12s}{alias}{mark}")
