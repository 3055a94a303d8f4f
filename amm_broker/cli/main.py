"""Main CLI entry point"""

import sys
import json
import time
import argparse
from pathlib import Path

from ..core.config import Config
from ..core.connection import Web3Manager
from ..core.logging import configure_logging
from ..protocols.uniswap_v2 import (
    ConstantProductPool,
    Factory as V2Factory,
    Fee,
    UniswapV2Broker,
    compute_trade_to_move_market,
)
from ..protocols.uniswap_v3 import Pool, UniswapV3Broker, decode_price_sqrt, encode_price_sqrt
from ..deploy import run_deploy_scripts


def get_results_dir():
    """Get results directory, create if needed"""
    results_dir = Path.cwd() / "results"
    results_dir.mkdir(exist_ok=True)
    return results_dir


def save_result(filename, data):
    """Save result to JSON file in results directory"""
    results_dir = get_results_dir()
    filepath = results_dir / filename
    with open(filepath, "w") as f:
        json.dump(data, f, indent=2, default=str)
    return filepath


def emit(filename, result):
    """Print result as JSON and save it under results/"""
    print(json.dumps(result, indent=2, default=str))
    filepath = save_result(filename, result)
    print(f"\nSaved to {filepath}", file=sys.stderr)


def _strip_receipt(result):
    """Swap results carry the web3 receipt; keep only what serializes cleanly"""
    result = dict(result)
    receipt = result.pop("receipt", None)
    if receipt is not None:
        result["block"] = receipt.blockNumber
        result["gas_used"] = receipt.gasUsed
    return result


def cmd_trade_size(args):
    """Compute the V2 trade that moves reserves to a target price (no node needed)"""
    fee = Fee(args.fee_numerator, args.fee_denominator)
    trade = compute_trade_to_move_market(
        args.true_price_a, args.true_price_b, args.reserve_a, args.reserve_b, fee
    )

    pool = ConstantProductPool(args.reserve_a, args.reserve_b)
    price_before = pool.spot_price
    amount_out = pool.swap(trade.amount_in, trade.a_to_b) if trade.amount_in else 0

    result = {
        "a_to_b": trade.a_to_b,
        "amount_in": trade.amount_in,
        "amount_out": amount_out,
        "price_before": str(price_before),
        "price_after": str(pool.spot_price),
        "target_price": f"{args.true_price_a}/{args.true_price_b}",
    }
    emit("trade_size.json", result)


def cmd_univ2_price(args):
    """Show reserves and spot price of a V2 pair"""
    manager = Web3Manager()
    pair = V2Factory(manager, args.factory).get_pair(args.token_a, args.token_b)
    reserve_a, reserve_b = pair.reserves_for(args.token_a, args.token_b)

    result = {
        "pair": pair.address,
        "token_a": manager.checksum(args.token_a),
        "token_b": manager.checksum(args.token_b),
        "reserve_a": reserve_a,
        "reserve_b": reserve_b,
        "price": str(pair.spot_price(args.token_a, args.token_b)),
    }
    emit(f"univ2_price_{pair.address[:10]}.json", result)


def cmd_univ2_swap_to_price(args):
    """Trade a V2 pair to a target price"""
    broker = UniswapV2Broker(
        manager=Web3Manager(require_signer=True),
        broker=args.broker,
        fee=Fee(args.fee_numerator, args.fee_denominator),
    )
    recipient = args.to or broker.broker_address

    print(f"Moving pair price to {args.true_price_a}/{args.true_price_b}", file=sys.stderr)
    result = broker.swap_to_price(
        trading_as_eoa=not args.as_contract,
        router=args.router,
        factory=args.factory,
        tokens=[args.token_a, args.token_b],
        true_prices=[args.true_price_a, args.true_price_b],
        max_spend=[args.max_spend_a, args.max_spend_b],
        to=recipient,
        deadline=int(time.time()) + args.deadline * 60,
        trader=args.trader,
    )
    emit(f"univ2_swap_to_price_{result['pair'][:10]}.json", _strip_receipt(result))


def cmd_univ3_price(args):
    """Show sqrtPriceX96, tick and price of a V3 pool"""
    pool = Pool(Web3Manager(), args.pool)
    sqrt_price_x96, tick = pool.slot0()[:2]

    result = {
        "pool": pool.address,
        "token0": pool.token0,
        "token1": pool.token1,
        "fee": pool.fee,
        "sqrt_price_x96": sqrt_price_x96,
        "tick": tick,
        "liquidity": pool.liquidity,
        "price": str(decode_price_sqrt(sqrt_price_x96)),
    }
    emit(f"univ3_price_{pool.address[:10]}.json", result)


def cmd_univ3_swap_to_price(args):
    """Trade a V3 pool to a target price (token1 per token0)"""
    target_sqrt_price_x96 = encode_price_sqrt(args.price, 1)

    if args.dry_run:
        manager = Web3Manager()
        broker = UniswapV3Broker(manager=manager)
        pool = Pool(manager, args.pool)
        state = pool.snapshot()
        trade = broker.compute_trade_to_move_market(state, target_sqrt_price_x96)

        print("[DRY RUN] No transaction sent", file=sys.stderr)
        result = {
            "pool": pool.address,
            "dry_run": True,
            "price_before": str(decode_price_sqrt(state.sqrt_price_x96)),
            "target_price": str(decode_price_sqrt(target_sqrt_price_x96)),
            "target_sqrt_price_x96": target_sqrt_price_x96,
            "zero_for_one": trade.zero_for_one,
            "amount_in": trade.amount_in,
            "amount_out": trade.amount_out,
            "tick_after": trade.tick_after,
        }
        emit(f"univ3_swap_to_price_{pool.address[:10]}.json", result)
        return

    broker = UniswapV3Broker(manager=Web3Manager(require_signer=True), broker=args.broker)
    recipient = args.recipient or broker.broker_address

    print(f"Moving pool price to {args.price}", file=sys.stderr)
    result = broker.swap_to_price(
        trading_as_eoa=not args.as_contract,
        pool=args.pool,
        router=args.router,
        target_sqrt_price_x96=target_sqrt_price_x96,
        recipient=recipient,
        deadline=int(time.time()) + args.deadline * 60,
        trader=args.trader,
        max_spend=args.max_spend,
    )
    emit(f"univ3_swap_to_price_{result['pool'][:10]}.json", _strip_receipt(result))


def cmd_deploy(args):
    """Run deployment scripts selected by tag"""
    manager = Web3Manager(require_signer=True)
    ran = run_deploy_scripts(manager, tags=args.tags)
    emit("deploy.json", {"scripts": ran, "tags": args.tags or []})


def _add_trade_args(parser):
    parser.add_argument("--fee-numerator", type=int, default=1, help="Fee multiplier numerator (default: 1)")
    parser.add_argument("--fee-denominator", type=int, default=1, help="Fee multiplier denominator (default: 1)")


def _add_execution_args(parser):
    parser.add_argument("--as-contract", action="store_true",
                        help="Spend the broker account's own balance instead of pulling from the trader")
    parser.add_argument("--trader", help="Account funding the trade (default: broker)")
    parser.add_argument("--broker", help="Account sending the swap (default: first account)")
    parser.add_argument("--deadline", type=int, default=30, help="Deadline in minutes (default: 30)")


def main():
    parser = argparse.ArgumentParser(
        prog="amm-broker",
        description="AMM Broker - move Uniswap V2/V3 prices to a target and deploy test contracts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""commands overview:
  trade-size  Compute the V2 trade that moves reserves to a target price
  univ2       Uniswap V2 pair price / swap-to-price
  univ3       Uniswap V3 pool price / swap-to-price
  deploy      Run deployment scripts by tag

examples:
  amm-broker trade-size 1000 1 10000000000000000000000000000 10000000000000000000000000
  amm-broker univ2 price <factory> <tokenA> <tokenB>
  amm-broker univ3 swap-to-price <pool> <router> 13 --dry-run
  amm-broker deploy --tags Store

configuration:
  RPC_URL            Set in .env file
  wallet             Set PRIVATE_KEY or MNEMONIC in wallet.env (else unlocked node accounts)
  AMM_ARTIFACTS_DIR  Compiled contract artifacts
  gas                gas_config.json (cwd or ~/.amm-broker/)
""",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    # ── Top-level: trade-size ──────────────────────────────────────────
    size_parser = subparsers.add_parser("trade-size", help="Compute V2 trade size (offline)")
    size_parser.add_argument("true_price_a", type=int, help="Target price numerator (A per B)")
    size_parser.add_argument("true_price_b", type=int, help="Target price denominator")
    size_parser.add_argument("reserve_a", type=int, help="Reserve of token A (wei)")
    size_parser.add_argument("reserve_b", type=int, help="Reserve of token B (wei)")
    _add_trade_args(size_parser)
    size_parser.set_defaults(func=cmd_trade_size)

    # ── Top-level: univ2 ───────────────────────────────────────────────
    univ2_parser = subparsers.add_parser("univ2", help="Uniswap V2 operations")
    univ2_sub = univ2_parser.add_subparsers(dest="univ2_command")

    v2_price_parser = univ2_sub.add_parser("price", help="Pair reserves and spot price")
    v2_price_parser.add_argument("factory", help="Factory address")
    v2_price_parser.add_argument("token_a", help="Token A address")
    v2_price_parser.add_argument("token_b", help="Token B address")
    v2_price_parser.set_defaults(func=cmd_univ2_price)

    v2_swap_parser = univ2_sub.add_parser("swap-to-price", help="Trade a pair to a target price")
    v2_swap_parser.add_argument("router", help="Router02 address")
    v2_swap_parser.add_argument("factory", help="Factory address")
    v2_swap_parser.add_argument("token_a", help="Token A address")
    v2_swap_parser.add_argument("token_b", help="Token B address")
    v2_swap_parser.add_argument("true_price_a", type=int, help="Target price numerator (A per B)")
    v2_swap_parser.add_argument("true_price_b", type=int, help="Target price denominator")
    v2_swap_parser.add_argument("--max-spend-a", type=int, default=2 ** 256 - 1, help="Cap on token A input (wei)")
    v2_swap_parser.add_argument("--max-spend-b", type=int, default=2 ** 256 - 1, help="Cap on token B input (wei)")
    v2_swap_parser.add_argument("--to", help="Recipient of the output (default: broker)")
    _add_trade_args(v2_swap_parser)
    _add_execution_args(v2_swap_parser)
    v2_swap_parser.set_defaults(func=cmd_univ2_swap_to_price)

    # ── Top-level: univ3 ───────────────────────────────────────────────
    univ3_parser = subparsers.add_parser("univ3", help="Uniswap V3 operations")
    univ3_sub = univ3_parser.add_subparsers(dest="univ3_command")

    v3_price_parser = univ3_sub.add_parser("price", help="Pool price and tick")
    v3_price_parser.add_argument("pool", help="Pool address")
    v3_price_parser.set_defaults(func=cmd_univ3_price)

    v3_swap_parser = univ3_sub.add_parser("swap-to-price", help="Trade a pool to a target price")
    v3_swap_parser.add_argument("pool", help="Pool address")
    v3_swap_parser.add_argument("router", help="SwapRouter address")
    v3_swap_parser.add_argument("price", help="Target price, token1 per token0 in raw units (e.g. 13)")
    v3_swap_parser.add_argument("--max-spend", type=int, help="Cap on the input amount (wei)")
    v3_swap_parser.add_argument("--recipient", help="Recipient of the output (default: broker)")
    v3_swap_parser.add_argument("--dry-run", action="store_true", help="Compute the trade without sending it")
    _add_execution_args(v3_swap_parser)
    v3_swap_parser.set_defaults(func=cmd_univ3_swap_to_price)

    # ── Top-level: deploy ──────────────────────────────────────────────
    deploy_parser = subparsers.add_parser("deploy", help="Run deployment scripts")
    deploy_parser.add_argument("--tags", nargs="+", help="Only run scripts with these tags (e.g. Store dvm)")
    deploy_parser.set_defaults(func=cmd_deploy)

    # ── Parse and dispatch ─────────────────────────────────────────────
    args = parser.parse_args()

    configure_logging("DEBUG" if args.verbose else Config().log_level)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "univ2" and not args.univ2_command:
        univ2_parser.print_help()
        sys.exit(1)

    if args.command == "univ3" and not args.univ3_command:
        univ3_parser.print_help()
        sys.exit(1)

    try:
        args.func(args)
    except KeyboardInterrupt:
        print("\nCancelled.")
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
