import asyncio
import logging

from ctf_client import config
from ctf_client.client import ConditionalTokenClient
from ctf_client.server import serve

logger = logging.getLogger('ctf_client')


def main() -> None:
    config.setup_logging()
    client = ConditionalTokenClient.from_config()
    if client.signer_address:
        logger.info(f"Signer: {client.signer_address}")
    else:
        logger.info("No PRIVATE_KEY set, client is read-only")
    try:
        asyncio.run(serve(client))
    except KeyboardInterrupt:
        logger.info("Status service stopped by user")


if __name__ == "__main__":
    main()
