"""
M365 Admin Password Generator — Command Line

Usage:
    python -m m365_passgen password                          # 16 chars, 2 digits, 2 symbols
    python -m m365_passgen password -l 24 --symbols 4 --exclude-ambiguous
    python -m m365_passgen password --preset temp-user -n 10
    python -m m365_passgen passphrase -w 5 -s . --digits 2
    python -m m365_passgen passphrase --wordlist-file ./words.txt

Preset management:
    python -m m365_passgen preset add <name> --mode password --set length=20 --set symbols=0
    python -m m365_passgen preset list
    python -m m365_passgen preset show <name>
    python -m m365_passgen preset remove <name>
    python -m m365_passgen preset set-default <name>

Wordlist cache:
    python -m m365_passgen wordlist fetch [--url URL] [--refresh]
    python -m m365_passgen wordlist list
    python -m m365_passgen wordlist clear-cache [--expired-only]
"""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from .config import GeneratorConfig
from .cache.store import WordlistCache
from .generators import (
    CharacterPasswordGenerator,
    GenerationError,
    PassphraseGenerator,
    passphrase_entropy_bits,
    password_entropy_bits,
    rate,
)
from .presets import MODES, GeneratorPreset, PresetStore, resolve_preset
from .wordlist import WordlistFetchError, build_loader

PASSWORD_FIELDS = (
    "length", "lowercase", "uppercase", "digits", "symbols",
    "exclude_ambiguous", "custom_symbols",
)
PASSPHRASE_FIELDS = ("word_count", "separator", "capitalize", "digits", "symbols")


# ---------------------------------------------------------------------------
# Preset management sub-commands
# ---------------------------------------------------------------------------

def _cmd_preset(args: argparse.Namespace) -> int:
    """Handle `preset add|list|show|remove|set-default` sub-commands."""
    action = args.preset_action

    if action == "list":
        return _preset_list()
    elif action == "show":
        return _preset_show(args)
    elif action == "add":
        return _preset_add(args)
    elif action == "remove":
        return _preset_remove(args)
    elif action == "set-default":
        return _preset_set_default(args)
    print("Usage: python -m m365_passgen preset {add|list|show|remove|set-default}")
    return 0


def _preset_list() -> int:
    store = PresetStore.load()
    presets = store.list_presets()
    if not presets:
        print("No presets configured. Add one with:\n")
        print("  python -m m365_passgen preset add <name> --mode password --set length=20")
        return 0

    print(f"\n  {'Name':<20s} {'Mode':<12s} {'Options':<50s} {'Default'}")
    print(f"  {'─'*20} {'─'*12} {'─'*50} {'─'*7}")
    for p in presets:
        default_marker = "  ✓" if p.name == store.default_preset else ""
        options = ", ".join(f"{k}={v!r}" for k, v in p.options.items()) or "(defaults)"
        print(f"  {p.name:<20s} {p.mode:<12s} {options:<50s}{default_marker}")
    print()
    return 0


def _preset_show(args: argparse.Namespace) -> int:
    preset = PresetStore.load().get(args.preset_name)
    if not preset:
        print(f"  ❌ Preset '{args.preset_name}' not found.")
        return 1
    request = preset.to_request()
    print(f"\n  {preset.name} ({preset.mode})")
    if preset.notes:
        print(f"  {preset.notes}")
    for k, v in dataclasses.asdict(request).items():
        print(f"    {k:<20s} {v!r}")
    print()
    return 0


def _parse_option(raw: str) -> tuple[str, Any]:
    """Parse `key=value`; values are read as JSON when possible (20, true, "x")."""
    if "=" not in raw:
        raise argparse.ArgumentTypeError(f"expected key=value, got {raw!r}")
    key, value = raw.split("=", 1)
    try:
        return key.strip(), json.loads(value)
    except json.JSONDecodeError:
        return key.strip(), value


def _preset_add(args: argparse.Namespace) -> int:
    store = PresetStore.load()
    name = args.preset_name
    if store.get(name):
        print(f"  Preset '{name}' already exists. It will be overwritten.")

    preset = GeneratorPreset(
        name=name,
        mode=args.mode,
        options=dict(args.options or []),
        notes=args.notes or "",
    )
    set_as_default = args.set_default or not store.presets
    store.add(preset, set_default=set_as_default)
    print(f"  ✅ Preset '{name}' saved.")
    if set_as_default:
        print("  ✅ Set as default preset.")
    return 0


def _preset_remove(args: argparse.Namespace) -> int:
    store = PresetStore.load()
    if store.remove(args.preset_name):
        print(f"  ✅ Preset '{args.preset_name}' removed.")
        return 0
    print(f"  ❌ Preset '{args.preset_name}' not found.")
    return 1


def _preset_set_default(args: argparse.Namespace) -> int:
    store = PresetStore.load()
    if store.set_default(args.preset_name):
        print(f"  ✅ Default preset set to '{args.preset_name}'.")
        return 0
    print(f"  ❌ Preset '{args.preset_name}' not found.")
    return 1


# ---------------------------------------------------------------------------
# Wordlist sub-commands
# ---------------------------------------------------------------------------

async def _cmd_wordlist(args: argparse.Namespace, config: GeneratorConfig) -> int:
    action = args.wordlist_action
    wl_config = config.wordlist

    if action == "fetch":
        if args.url:
            wl_config.url = args.url
        wl_config.local_path = ""
        loader = build_loader(wl_config, use_cache=True)
        if args.refresh and loader.cache:
            # Bypass the cached copy but still store the fresh one
            cache, loader.cache = loader.cache, None
            wordlist = await loader.get()
            cache.put(wordlist, wl_config.url)
        else:
            wordlist = await loader.get()
        print(f"  ✅ {len(wordlist)} words available from {wordlist.source}")
        return 0

    cache = WordlistCache(wl_config.cache_dir, ttl_hours=wl_config.cache_ttl_hours)

    if action == "list":
        entries = cache.entries()
        if not entries:
            print("No cached wordlists.")
            return 0
        print(f"\n  {'Source':<70s} {'Words':>7s} {'Age (h)':>8s}")
        print(f"  {'─'*70} {'─'*7} {'─'*8}")
        for e in entries:
            marker = "  (expired)" if e["expired"] else ""
            print(f"  {e['source']:<70s} {e['word_count']:>7d} {e['age_hours']:>8.1f}{marker}")
        print()
        return 0

    if action == "clear-cache":
        removed = cache.clear_expired() if args.expired_only else cache.clear()
        print(f"  ✅ Removed {removed} cached wordlist(s).")
        return 0

    print("Usage: python -m m365_passgen wordlist {fetch|list|clear-cache}")
    return 0


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------

def _base_request(args: argparse.Namespace, config: GeneratorConfig, mode: str):
    """Start from config defaults, then a preset (named or default), then CLI flags."""
    if args.preset:
        preset = resolve_preset(args.preset)
        if not preset:
            raise GenerationError(
                f"Preset '{args.preset}' not found. Use 'preset list' to see available presets."
            )
        if preset.mode != mode:
            raise GenerationError(f"Preset '{preset.name}' is a {preset.mode} preset, not {mode}.")
        return preset.to_request()

    preset = resolve_preset()
    if preset and preset.mode == mode:
        logging.getLogger("m365_passgen.presets").debug(f"Using default preset '{preset.name}'")
        return preset.to_request()
    return dataclasses.replace(getattr(config, mode))


def build_request(args: argparse.Namespace, config: GeneratorConfig, mode: str):
    """Resolve the request for *mode* from config, preset and CLI overrides."""
    request = _base_request(args, config, mode)
    names = PASSWORD_FIELDS if mode == "password" else PASSPHRASE_FIELDS
    for name in names:
        value = getattr(args, name, None)
        if value is not None:
            setattr(request, name, value)
    return request


def _run_password(args: argparse.Namespace, config: GeneratorConfig) -> int:
    request = build_request(args, config, "password")
    generator = CharacterPasswordGenerator()

    secrets_out = [generator.generate(request) for _ in range(args.count)]
    for secret in secrets_out:
        print(secret)

    bits = password_entropy_bits(request)
    print(f"  ≈ {bits:.0f} bits ({rate(bits)})", file=sys.stderr)
    return 0


async def _run_passphrase(args: argparse.Namespace, config: GeneratorConfig) -> int:
    request = build_request(args, config, "passphrase")
    wl_config = config.wordlist
    if args.wordlist_file:
        wl_config.local_path = str(args.wordlist_file)
    if args.wordlist_url:
        wl_config.url = args.wordlist_url
        wl_config.local_path = ""

    # Check the request before paying for a download
    PassphraseGenerator().check_request(request)

    loader = build_loader(wl_config, use_cache=not args.no_cache)
    wordlist = await loader.get()
    generator = PassphraseGenerator()

    secrets_out = [generator.generate(request, wordlist) for _ in range(args.count)]
    for secret in secrets_out:
        print(secret)

    bits = passphrase_entropy_bits(request, wordlist)
    print(f"  ≈ {bits:.0f} bits ({rate(bits)}, {len(wordlist)}-word list)", file=sys.stderr)
    return 0


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

def _positive_int(raw: str) -> int:
    value = int(raw)
    if value < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return value


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="m365_passgen",
        description="Password and passphrase generator for M365 tenant administration",
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Path to JSON configuration file",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # --- password ---
    pw = subparsers.add_parser("password", help="Generate character passwords")
    pw.add_argument("--length", "-l", type=int, help="Total length (default: 16)")
    pw.add_argument("--digits", type=int, help="Exact number of guaranteed digits")
    pw.add_argument("--symbols", type=int, help="Exact number of guaranteed symbols")
    pw.add_argument("--no-lower", dest="lowercase", action="store_const", const=False,
                    help="Leave out lowercase letters")
    pw.add_argument("--no-upper", dest="uppercase", action="store_const", const=False,
                    help="Leave out uppercase letters")
    pw.add_argument("--exclude-ambiguous", dest="exclude_ambiguous", action="store_const",
                    const=True, help="Leave out l, 1, I, O and 0")
    pw.add_argument("--symbol-set", dest="custom_symbols",
                    help="Symbols to use instead of the default set")
    pw.add_argument("--count", "-n", type=_positive_int, default=1,
                    help="How many passwords to generate")
    pw.add_argument("--preset", "-p", help="Start from a saved preset")

    # --- passphrase ---
    pp = subparsers.add_parser("passphrase", help="Generate wordlist passphrases")
    pp.add_argument("--words", "-w", dest="word_count", type=int,
                    help="Number of words (default: 4)")
    pp.add_argument("--separator", "-s", help="String between words (default: -)")
    pp.add_argument("--no-capitalize", dest="capitalize", action="store_const", const=False,
                    help="Keep words lowercase")
    pp.add_argument("--digits", type=int, help="Digits to attach to words")
    pp.add_argument("--symbols", type=int, help="Symbols to attach to words")
    pp.add_argument("--wordlist-file", type=Path, help="Read words from a local file")
    pp.add_argument("--wordlist-url", help="Download words from this https:// URL")
    pp.add_argument("--no-cache", action="store_true",
                    help="Always download the wordlist")
    pp.add_argument("--count", "-n", type=_positive_int, default=1,
                    help="How many passphrases to generate")
    pp.add_argument("--preset", "-p", help="Start from a saved preset")

    # --- preset ---
    prs = subparsers.add_parser("preset", help="Manage generation presets")
    prs_sub = prs.add_subparsers(dest="preset_action", help="Preset actions")

    add_p = prs_sub.add_parser("add", help="Add or update a preset")
    add_p.add_argument("preset_name", help="Short name for the preset (e.g. 'temp-user')")
    add_p.add_argument("--mode", choices=MODES, default="password")
    add_p.add_argument("--set", dest="options", action="append", type=_parse_option,
                       metavar="KEY=VALUE", help="Request option, repeatable")
    add_p.add_argument("--notes", help="Optional admin notes")
    add_p.add_argument("--set-default", action="store_true", help="Set as default preset")

    prs_sub.add_parser("list", help="List all presets")

    show_p = prs_sub.add_parser("show", help="Show a preset's resolved options")
    show_p.add_argument("preset_name")

    rm_p = prs_sub.add_parser("remove", help="Remove a preset")
    rm_p.add_argument("preset_name")

    sd_p = prs_sub.add_parser("set-default", help="Set the default preset")
    sd_p.add_argument("preset_name")

    # --- wordlist ---
    wl = subparsers.add_parser("wordlist", help="Manage the passphrase wordlist cache")
    wl_sub = wl.add_subparsers(dest="wordlist_action", help="Wordlist actions")

    fetch_p = wl_sub.add_parser("fetch", help="Download and cache a wordlist")
    fetch_p.add_argument("--url", help="Wordlist URL (default: EFF large wordlist)")
    fetch_p.add_argument("--refresh", action="store_true", help="Ignore the cached copy")

    wl_sub.add_parser("list", help="List cached wordlists")

    clear_p = wl_sub.add_parser("clear-cache", help="Remove cached wordlists")
    clear_p.add_argument("--expired-only", action="store_true")

    return parser.parse_args(argv)


async def main_async(argv: Optional[list[str]] = None) -> int:
    """Async entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "preset":
            return _cmd_preset(args)

        config = GeneratorConfig.load(args.config)
        if config.verbose:
            logging.getLogger("m365_passgen").setLevel(logging.DEBUG)

        if args.command == "password":
            return _run_password(args, config)
        if args.command == "passphrase":
            return await _run_passphrase(args, config)
        if args.command == "wordlist":
            return await _cmd_wordlist(args, config)
    except (GenerationError, WordlistFetchError, OSError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    print("Usage: python -m m365_passgen {password|passphrase|preset|wordlist} ...")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Synchronous entry point for `python -m m365_passgen`."""
    return asyncio.run(main_async(argv))


if __name__ == "__main__":
    sys.exit(main())
