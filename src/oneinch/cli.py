"""Command-line front-end for the 1inch aggregation API.

Token symbols are resolved through the API's token listing, human
amounts are converted to raw amounts, and transactions are optionally
signed and sent with the configured wallet.

Usage:
    oneinch quote ETH DAI 1.5
    oneinch swap USDC DAI 100 1 --dry-run
    oneinch approveTransaction USDC --human-amount 100

Environment variables (or .env):
    ONEINCH_CHAIN: Chain name or ID (default: mainnet)
    ONEINCH_RPC_URL: JSON-RPC endpoint used to send transactions
    ONEINCH_PRIVATE_KEY: Private key of the sending wallet
"""

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from oneinch.amounts import calculate_price, to_raw_amount
from oneinch.client import OneInchClient
from oneinch.config import Settings
from oneinch.exceptions import OneInchError
from oneinch.models import QuoteOptions, SwapOptions
from oneinch.signer import WalletSigner
from oneinch.tokens import resolve_token, resolve_tokens

logger = logging.getLogger(__name__)


@dataclass
class CommandContext:
    """Collaborators shared by every command of one invocation."""

    client: OneInchClient
    settings: Settings
    signer_factory: Callable[[Settings], Any] = WalletSigner.from_settings
    _signer: Any = field(default=None, repr=False)

    @property
    def signer(self):
        """Wallet signer, created on first use."""
        if self._signer is None:
            self._signer = self.signer_factory(self.settings)
        return self._signer


# ======================
# Commands
# ======================

async def cmd_healthcheck(args, ctx: CommandContext) -> Any:
    return await ctx.client.healthcheck()


async def cmd_approve_spender(args, ctx: CommandContext) -> Any:
    return await ctx.client.approve_spender()


async def cmd_tokens(args, ctx: CommandContext) -> Any:
    return await ctx.client.tokens()


async def cmd_token(args, ctx: CommandContext) -> Any:
    token = await resolve_token(ctx.client, args.token_symbol)
    return token.to_dict()


async def cmd_liquidity_sources(args, ctx: CommandContext) -> Any:
    return await ctx.client.liquidity_sources()


async def cmd_presets(args, ctx: CommandContext) -> Any:
    return await ctx.client.presets()


async def cmd_config(args, ctx: CommandContext) -> Any:
    return ctx.settings.get_safe_dict()


async def cmd_approve_transaction(args, ctx: CommandContext) -> Any:
    """Build an approve transaction; send it unless --dry-run."""
    token = await resolve_token(ctx.client, args.token_symbol)
    amount = to_raw_amount(args.human_amount, token.decimals)
    tx_request = await ctx.client.approve_transaction(token.address, amount)

    if args.dry_run:
        return tx_request

    result = await ctx.signer.sign_and_send_transaction(tx_request)
    return {"transactionHash": result["transactionHash"]}


async def cmd_approve_allowance(args, ctx: CommandContext) -> Any:
    token = await resolve_token(ctx.client, args.token_symbol)
    return await ctx.client.approve_allowance(token.address, args.wallet_address)


async def cmd_quote(args, ctx: CommandContext) -> Any:
    """Quote a swap and append the derived price."""
    from_token, to_token = await resolve_tokens(
        ctx.client, args.from_token_symbol, args.to_token_symbol
    )
    amount = to_raw_amount(args.human_amount, from_token.decimals)
    response = await ctx.client.quote(
        from_token.address,
        to_token.address,
        amount,
        _quote_options(args),
    )
    return _with_price(response, from_token, to_token)


async def cmd_swap(args, ctx: CommandContext) -> Any:
    """Build a swap; print it with its price on --dry-run, otherwise send it."""
    from_token, to_token = await resolve_tokens(
        ctx.client, args.from_token_symbol, args.to_token_symbol
    )
    amount = to_raw_amount(args.human_amount, from_token.decimals)
    slippage = args.slippage if args.slippage is not None else ctx.settings.default_slippage

    signer = ctx.signer
    from_address = await signer.get_address()

    response = await ctx.client.swap(
        from_token.address,
        to_token.address,
        amount,
        from_address,
        slippage,
        _swap_options(args),
    )

    if args.dry_run:
        return _with_price(response, from_token, to_token)

    tx_request = dict(response["tx"])
    # The wallet re-estimates gas; the API's estimate is not used
    tx_request.pop("gas", None)
    result = await signer.sign_and_send_transaction(tx_request)
    return {"transactionHash": result["transactionHash"]}


def _with_price(response: dict, from_token, to_token) -> dict:
    price = calculate_price(
        from_token,
        response["fromTokenAmount"],
        to_token,
        response["toTokenAmount"],
    )
    return {**response, "price": price}


def _quote_options(args) -> QuoteOptions:
    return QuoteOptions(
        fee=args.fee,
        protocols=args.protocols,
        gas_price=args.gas_price,
        complexity_level=args.complexity_level,
        connector_tokens=args.connector_tokens,
        gas_limit=args.gas_limit,
        parts=args.parts,
        main_route_parts=args.main_route_parts,
    )


def _swap_options(args) -> SwapOptions:
    return SwapOptions(
        fee=args.fee,
        protocols=args.protocols,
        gas_price=args.gas_price,
        complexity_level=args.complexity_level,
        connector_tokens=args.connector_tokens,
        gas_limit=args.gas_limit,
        parts=args.parts,
        main_route_parts=args.main_route_parts,
        dest_receiver=args.dest_receiver,
        referrer_address=args.referrer_address,
        burn_chi=args.burn_chi,
        allow_partial_fill=args.allow_partial_fill,
        disable_estimate=args.disable_estimate,
        permit=args.permit,
    )


# ======================
# Argument parser
# ======================

def _add_route_options(parser: argparse.ArgumentParser) -> None:
    """Options shared by quote and swap."""
    parser.add_argument("--protocols", help="Comma-separated liquidity sources to use")
    parser.add_argument("--fee", type=float, help="Referrer fee percent")
    parser.add_argument("--gas-limit", type=int)
    parser.add_argument("--connector-tokens", help="Comma-separated connector token addresses")
    parser.add_argument("--complexity-level")
    parser.add_argument("--main-route-parts", type=int)
    parser.add_argument("--parts", type=int)
    parser.add_argument("--gas-price", help="Gas price in wei")


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser."""
    parser = argparse.ArgumentParser(
        prog="oneinch",
        description="1inch aggregation API client",
    )
    parser.add_argument("--chain", help="Chain name or ID (overrides ONEINCH_CHAIN)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command", metavar="command")
    sub.required = True

    for name, handler, help_text in (
        ("healthcheck", cmd_healthcheck, "Check API health"),
        ("approveSpender", cmd_approve_spender, "Show the router address to approve"),
        ("tokens", cmd_tokens, "List tokens"),
        ("liquiditySources", cmd_liquidity_sources, "List liquidity sources"),
        ("presets", cmd_presets, "List route presets"),
        ("config", cmd_config, "Show effective settings (secrets redacted)"),
    ):
        sub.add_parser(name, help=help_text).set_defaults(handler=handler)

    p = sub.add_parser("token", help="Look up a token by symbol")
    p.add_argument("token_symbol")
    p.set_defaults(handler=cmd_token)

    p = sub.add_parser("approveTransaction", help="Approve the router to spend a token")
    p.add_argument("token_symbol")
    p.add_argument("--human-amount", help="Amount to approve (default: unlimited)")
    p.add_argument("--dry-run", action="store_true", help="Print the transaction instead of sending it")
    p.set_defaults(handler=cmd_approve_transaction)

    p = sub.add_parser("approveAllowance", help="Show the router allowance for a wallet")
    p.add_argument("token_symbol")
    p.add_argument("wallet_address")
    p.set_defaults(handler=cmd_approve_allowance)

    p = sub.add_parser("quote", help="Quote a swap")
    p.add_argument("from_token_symbol")
    p.add_argument("to_token_symbol")
    p.add_argument("human_amount")
    _add_route_options(p)
    p.set_defaults(handler=cmd_quote)

    p = sub.add_parser("swap", help="Swap tokens")
    p.add_argument("from_token_symbol")
    p.add_argument("to_token_symbol")
    p.add_argument("human_amount")
    p.add_argument("slippage", nargs="?", type=float, help="Slippage percent (default: 0.5)")
    _add_route_options(p)
    p.add_argument("--dest-receiver")
    p.add_argument("--referrer-address")
    p.add_argument("--disable-estimate", action="store_true", default=None)
    p.add_argument("--permit")
    p.add_argument("--burn-chi", action="store_true", default=None)
    p.add_argument(
        "--no-allow-partial-fill",
        dest="allow_partial_fill",
        action="store_false",
        default=True,
    )
    p.add_argument("--dry-run", action="store_true", help="Print the swap instead of sending it")
    p.set_defaults(handler=cmd_swap)

    return parser


# ======================
# Entry point
# ======================

async def run_command(
    args: argparse.Namespace,
    settings: Settings,
    client_factory: Callable[[Settings], OneInchClient] = OneInchClient.from_settings,
    signer_factory: Callable[[Settings], Any] = WalletSigner.from_settings,
) -> Any:
    """Run one parsed command and return its result."""
    async with client_factory(settings) as client:
        ctx = CommandContext(client=client, settings=settings, signer_factory=signer_factory)
        return await args.handler(args, ctx)


def main(
    argv: Optional[list[str]] = None,
    client_factory: Callable[[Settings], OneInchClient] = OneInchClient.from_settings,
    signer_factory: Callable[[Settings], Any] = WalletSigner.from_settings,
) -> int:
    """CLI entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)

    try:
        settings = Settings()
        if args.chain:
            settings = settings.model_copy(update={"chain": args.chain})

        log_level = logging.DEBUG if (args.verbose or settings.debug) else logging.INFO
        logging.basicConfig(
            level=log_level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
        logger.debug(f"Using {settings.api_url} on chain {settings.chain_id}")

        result = asyncio.run(run_command(args, settings, client_factory, signer_factory))
    except KeyboardInterrupt:
        print("Interrupted", file=sys.stderr)
        return 130
    except OneInchError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error ({e.kind.value}): {e.message}", file=sys.stderr)
        return 1
    except Exception as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=4, default=str))
    return 0


def cli() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    cli()
