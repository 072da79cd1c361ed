#!/usr/bin/env python3
"""命令行入口：启动 GSI 接收服务、离线解析录制的快照、向服务回放快照。"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from . import __version__
from .api import GameStateClient
from .config import load_config
from .data.models import GameStateEvent
from .export import export_state, to_jsonable
from .parsers import MalformedPayloadError, SnapshotLoader, parse_payload
from .server import GameStateServer


def _summarize(event: GameStateEvent) -> str:
    state = event.state
    game_time = state.map.game_time if state.map else None
    if event.mode == "observer":
        players = state.player if isinstance(state.player, tuple) else ()
        filled = sum(1 for p in players if p is not None)
        return f"[observer] game_time={game_time} players={filled}"
    gold = getattr(state.player, "gold", None)
    hero = getattr(state.hero, "name", None)
    return f"[player] game_time={game_time} hero={hero} gold={gold}"


def _snapshot_paths(args: argparse.Namespace) -> list[Path]:
    if args.file:
        return [Path(args.file)]
    return list(SnapshotLoader(args.snapshot_dir).iter_snapshot_files())


def cmd_serve(args: argparse.Namespace) -> int:
    """启动 GSI 接收服务，并打印每次快照的摘要。"""
    config = load_config()
    cfg = config["server"]
    debug = args.debug or bool(cfg.get("debug", False))
    level = "DEBUG" if debug else config["logging"].get("level", "INFO")
    logging.basicConfig(level=level, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    try:
        server = GameStateServer(path=args.path or cfg.get("path", "/"), debug=debug)
    except ValueError as e:
        print(e)
        return 1
    server.on_player_state(lambda event: print(_summarize(event)))
    server.on_observer_state(lambda event: print(_summarize(event)))
    server.on_error(lambda err: print(f"无效请求: {err}"))
    server.listen(port=args.port or int(cfg.get("port", 9001)), host=args.host or cfg.get("host", "127.0.0.1"))
    return 0


def cmd_parse(args: argparse.Namespace) -> int:
    """解析录制的快照文件，输出规范化后的 state（或 changes）。"""
    paths = _snapshot_paths(args)
    if not paths:
        print("没有快照文件。请在 config 的 snapshot_dir 下放置 JSON，或使用 --file 指定。")
        return 1

    loader = SnapshotLoader(args.snapshot_dir)
    results = []
    for p in paths:
        try:
            payload = loader.load_snapshot_file(p)
        except (MalformedPayloadError, OSError) as e:
            print(f"跳过 {p}: {e}")
            continue
        event = parse_payload(payload)
        results.append({
            "file": str(p),
            "mode": event.mode,
            "state": event.changes if args.changes else event.state,
        })
    if not results:
        print("没有可用的快照。")
        return 1

    data = results[0] if len(results) == 1 else results
    if args.output == "-":
        print(json.dumps(to_jsonable(data), ensure_ascii=False, indent=2))
        return 0
    out_path = export_state(data, args.output)
    print(f"已解析 {len(results)} 个快照，写入: {out_path}")
    return 0


def cmd_send(args: argparse.Namespace) -> int:
    """把录制的快照依次 POST 到运行中的 GSI 服务。"""
    paths = _snapshot_paths(args)
    if not paths:
        print("没有快照文件。请在 config 的 snapshot_dir 下放置 JSON，或使用 --file 指定。")
        return 1
    client = GameStateClient(url=args.url, delay=args.delay)
    failed = 0
    for path, status in client.replay(paths):
        print(f"{path}\t{status if status is not None else '连接失败'}")
        if status != 200:
            failed += 1
    print(f"已发送 {len(paths)} 个快照，失败 {failed} 个")
    return 0 if failed == 0 else 1


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Dota 2 Game State Integration：接收、解析、回放客户端快照")
    parser.add_argument("--version", action="version", version=__version__)
    sub = parser.add_subparsers(dest="command", help="子命令")

    # serve
    p_serve = sub.add_parser("serve", help="启动 GSI 接收服务")
    p_serve.add_argument("--host", type=str, default=None, help="监听地址")
    p_serve.add_argument("--port", type=int, default=None, help="监听端口")
    p_serve.add_argument("--path", type=str, default=None, help="接收路径，必须以 / 开头")
    p_serve.add_argument("--debug", action="store_true", help="输出调试日志")
    p_serve.set_defaults(run=cmd_serve)

    # parse
    p_parse = sub.add_parser("parse", help="解析录制的快照 JSON")
    p_parse.add_argument("--file", type=str, default=None, help="单个快照文件")
    p_parse.add_argument("--snapshot-dir", type=str, default=None, help="快照所在目录")
    p_parse.add_argument("--changes", action="store_true", help="输出 previously 对应的变化而非当前状态")
    p_parse.add_argument("-o", "--output", type=str, default=None, help="输出 JSON 路径，- 表示标准输出")
    p_parse.set_defaults(run=cmd_parse)

    # send
    p_send = sub.add_parser("send", help="向 GSI 服务回放快照")
    p_send.add_argument("--file", type=str, default=None, help="单个快照文件")
    p_send.add_argument("--snapshot-dir", type=str, default=None, help="快照所在目录")
    p_send.add_argument("--url", type=str, default=None, help="GSI 服务地址")
    p_send.add_argument("--delay", type=float, default=None, help="两次发送的最小间隔（秒）")
    p_send.set_defaults(run=cmd_send)

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 0
    return args.run(args)


if __name__ == "__main__":
    sys.exit(main())
