#!/usr/bin/env python3
"""
Example: Resolving Deployment Networks

This example demonstrates:
- Resolving the built-in networks (static and mnemonic-backed)
- Declaring custom networks with explicit overrides
- Handling the resolver's errors
- Opening a connection lazily from a resolved profile

Requirements:
- Set HDMNEMONIC to resolve the mnemonic-backed network
"""

import asyncio
import logging
from pathlib import Path
import sys

# Add the src directory to the path so we can import the package modules
project_dir = Path(__file__).parent.parent
src_dir = project_dir / "src"
sys.path.insert(0, str(src_dir))

from deploy_profiles import ConfigResolver, DeclarationSet, ResolverConfig
from deploy_profiles.core.exceptions import (
    DeployProfilesError,
    InvalidProfile,
    MissingCredential,
    UnknownEnvironment,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def example_builtin_networks():
    """Resolve every shipped network that the environment allows."""
    print("\n=== Built-in Networks ===")

    resolver = ConfigResolver(config=ResolverConfig.from_env())

    for name in resolver.names():
        try:
            profile = resolver.resolve(name)
        except MissingCredential as e:
            print(f"{name}: skipped, set {e.variable} to resolve it")
            continue

        print(f"{name}: chain {profile.chain_id} at {profile.endpoint_url}")
        print(f"  gas limit {profile.gas_limit}, gas price {profile.gas_price} wei")
        if not profile.is_dynamic:
            print(f"  sender {profile.sender}")


def example_custom_declarations():
    """Declare a local network and a cheaper override of it."""
    print("\n=== Custom Declarations ===")

    declarations = DeclarationSet.from_mapping({
        'defaults': {'host': '127.0.0.1', 'port': 8545},
        'networks': {
            'development': {'chain_id': 1337, 'gas_limit': 6721975, 'gas_price': 20_000_000_000},
            'development-free': {'extends': 'development', 'gas_price': 0},
        },
    })
    resolver = ConfigResolver(declarations=declarations)

    for name, profile in resolver.resolve_all().items():
        print(f"{name}: gas price {profile.gas_price} (layers: {declarations.lineage(name)})")


def example_error_handling():
    """Show the errors callers should expect."""
    print("\n=== Error Handling ===")

    resolver = ConfigResolver(env=lambda name: None)

    try:
        resolver.resolve('nonexistent')
    except UnknownEnvironment as e:
        print(f"Unknown environment: {e.message}")

    try:
        resolver.resolve('rinkeby')
    except MissingCredential as e:
        print(f"Missing credential: {e.variable} for {e.environment}")

    broken = ConfigResolver(declarations=DeclarationSet.from_mapping({
        'networks': {'broken': {'host': 'localhost', 'port': 8545, 'chain_id': 1,
                                'gas_limit': 0, 'gas_price': 1}},
    }))
    try:
        broken.resolve('broken')
    except InvalidProfile as e:
        print(f"Invalid profile: {e.field}={e.value!r} in {e.environment}")


async def example_lazy_connection():
    """A connection opens its session only inside the context manager."""
    print("\n=== Lazy Connection ===")

    profile = ConfigResolver().resolve('ropsten')
    connection = profile.connect()
    print(f"Before use: session={connection.session}")

    async with connection:
        print(f"Inside: session open={not connection.session.closed}")

    print(f"After: closed={connection.closed}")


async def main():
    """Run all examples."""
    try:
        example_builtin_networks()
        example_custom_declarations()
        example_error_handling()
        await example_lazy_connection()
    except DeployProfilesError as e:
        print(f"\nExample failed with error: {e}")
        logger.exception("Example execution failed")


if __name__ == "__main__":
    asyncio.run(main())
