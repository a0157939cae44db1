#!/usr/bin/env python3
"""
Example: Using the hydrus_api HydrusFile and HydrusClient APIs

This example demonstrates both the high-level HydrusFile API and the low-level
HydrusClient dispatch API against a running Hydrus client.

Usage:
    python async_example.py --url http://127.0.0.1:45869 --key <access key> --hash <file hash>
"""

import asyncio
import argparse
import logging
from datetime import datetime, timezone

# High-level API
from hydrus_api import HydrusClient, ServiceName, Tag

# Low-level API (optional, for advanced use)
from hydrus_api import SetTimeRequestBuilder, DbTimeRequestType
from hydrus_api.endpoints.access_management import ApiVersion


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
log = logging.getLogger(__name__)


async def high_level_example(client: HydrusClient, file_hash: str):
    """
    Demonstrates the high-level HydrusFile API (recommended for most use cases).
    """
    log.info("=== High-level HydrusFile API Example ===")

    file = client.file(file_hash)

    log.info("\n1. Reading tags...")
    for service, tags in (await file.services_with_tags()).items():
        log.info(f"   {service}: {', '.join(str(t) for t in tags) or '(none)'}")

    log.info("\n2. Adding a tag to 'my tags'...")
    await file.add_tags(ServiceName.my_tags(), [Tag("example", "meta")])

    log.info("\n3. Marking the file as viewed now...")
    await file.set_time(
        SetTimeRequestBuilder.for_last_viewed_time(canvas_type=0)
        .set_timestamp(datetime.now(timezone.utc))
    )

    metadata = await file.metadata()
    log.info(f"   File {metadata.file_id}: {metadata.mime}, {metadata.width}x{metadata.height}")


async def low_level_example(client: HydrusClient, file_hash: str):
    """
    Demonstrates the low-level HydrusClient API (for advanced use cases).

    Every endpoint is a descriptor passed to client.call().
    """
    log.info("\n\n=== Low-level HydrusClient API Example ===")

    version = await client.call(ApiVersion)
    log.info(f"API version {version.version} (hydrus v{version.hydrus_version})")

    services = await client.get_services()
    service_key = services.key_for(ServiceName.my_files())
    if service_key is None:
        log.warning("   'my files' service not found; skipping import time example")
        return

    request = (
        SetTimeRequestBuilder.for_db_time(DbTimeRequestType.FILE_IMPORTED_TIME, service_key)
        .add_hash(file_hash)
        .build()
    )
    log.info(f"Would send: {request.to_json()}")
    log.info("   # await client.set_time(request)")


async def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="hydrus_api examples - High-level HydrusFile and Low-level Client APIs"
    )
    parser.add_argument('--url', default='http://127.0.0.1:45869', help='Hydrus client API URL')
    parser.add_argument('--key', required=True, help='Client API access key')
    parser.add_argument('--hash', required=True, help='SHA256 hash of a file in the client')
    parser.add_argument(
        '--api',
        choices=['high', 'low', 'both'],
        default='both',
        help='Which API to demonstrate (default: both)'
    )

    args = parser.parse_args()

    try:
        async with HydrusClient(args.url, args.key) as client:
            if args.api in ['high', 'both']:
                await high_level_example(client, args.hash)

            if args.api in ['low', 'both']:
                await low_level_example(client, args.hash)

        log.info("\nExamples completed successfully")

    except Exception as e:
        log.error(f"Error: {e}", exc_info=True)
        return 1

    return 0


if __name__ == '__main__':
    exit_code = asyncio.run(main())
    exit(exit_code)
