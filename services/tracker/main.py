import asyncio

import uvicorn
from loguru import logger

from services.api.main import app
from wallet_tracker.chains.solana_watcher import SolanaWatcher
from wallet_tracker.config import AppSettings


async def serve_liveness(port: int):
    config = uvicorn.Config(app, host="0.0.0.0", port=port, log_level="warning")
    server = uvicorn.Server(config)
    logger.info("Server is running on port {}", port)
    await server.serve()


async def run(settings: AppSettings):
    wallets = settings.watch_list()
    watcher = SolanaWatcher.create(settings, wallets)
    logger.info("Starting Solana wallet tracker: {}", settings.sol_rpc_url)
    await watcher.notifier.announce_startup(wallets)

    tasks = [watcher.run()]
    if settings.serve_liveness:
        tasks.append(serve_liveness(settings.port))
    try:
        await asyncio.gather(*tasks)
    finally:
        await watcher.ledger.close()


def main():
    settings = AppSettings()
    logger.remove()
    logger.add(lambda m: print(m, end=""), level=settings.log_level)

    try:
        asyncio.run(run(settings))
    except KeyboardInterrupt:
        logger.info("Wallet tracker interrupted; shutting down.")


if __name__ == "__main__":
    main()
