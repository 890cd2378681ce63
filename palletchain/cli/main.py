# MIT License
# Copyright (c) 2025 Hashborn

import argparse
import json
import logging
import sys
from typing import Dict, List

from pydantic import TypeAdapter, ValidationError as ModelValidationError

from ..blockchain.core.runtime import Block, Runtime
from ..protocol.config.params import RUNTIMES, get_runtime_config
from ..protocol.types.common import ConfigError, DispatchError, ValidationError

_BLOCKS = TypeAdapter(List[Block])

def load_genesis(path: str) -> Dict[str, int]:
    with open(path, "r") as f:
        data = json.load(f)
    # Either {"alloc": {...}} or a bare address -> amount mapping
    alloc = data.get("alloc", data)
    return {addr: int(amount) for addr, amount in alloc.items()}

def load_blocks(path: str) -> List[Block]:
    with open(path, "r") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("blocks", [])
    return _BLOCKS.validate_python(data)

# --- Commands ---
def cmd_run(args):
    try:
        runtime = Runtime(get_runtime_config(args.runtime))
    except ConfigError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if args.genesis:
        try:
            runtime.apply_genesis(load_genesis(args.genesis))
        except (OSError, ValueError, AttributeError, TypeError, DispatchError) as e:
            print(f"Error: invalid genesis file: {e}")
            sys.exit(1)

    try:
        blocks = load_blocks(args.blocks)
    except ModelValidationError as e:
        print(f"Error: invalid blocks file: {e}")
        sys.exit(1)

    receipts = []
    exit_code = 0
    for block in blocks:
        try:
            receipt = runtime.execute_block(block)
        except ValidationError as e:
            print(f"Error: {e}")
            exit_code = 1
            break
        receipts.append(receipt.to_dict())
        if args.bump and not runtime.config.advance_block_number:
            runtime.system.increment_block_number()

    output = {"receipts": receipts, "state": runtime.to_dict()}
    print(json.dumps(output, indent=2))
    if exit_code:
        sys.exit(exit_code)

def cmd_config(args):
    names = [args.runtime] if args.runtime else sorted(RUNTIMES)
    try:
        configs = [get_runtime_config(name).describe() for name in names]
    except ConfigError as e:
        print(f"Error: {e}")
        sys.exit(1)
    print(json.dumps(configs, indent=2))

def main(argv=None):
    parser = argparse.ArgumentParser(description="PalletChain runtime CLI")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Execute a file of blocks and print the resulting state")
    run_parser.add_argument("--blocks", required=True, help="JSON list of blocks")
    run_parser.add_argument("--genesis", help="JSON genesis allocation")
    run_parser.add_argument("--runtime", default=None, help="Runtime config name (default: $PALLETCHAIN_RUNTIME or devnet)")
    run_parser.add_argument("--bump", action="store_true",
                            help="Increment the block number after every executed block")
    run_parser.set_defaults(func=cmd_run)

    config_parser = subparsers.add_parser("config", help="Show runtime configs")
    config_parser.add_argument("--runtime", default=None, help="Only this runtime")
    config_parser.set_defaults(func=cmd_config)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format='%(asctime)s %(levelname)s: %(message)s',
        datefmt='%H:%M:%S'
    )

    args.func(args)

if __name__ == "__main__":
    main()
