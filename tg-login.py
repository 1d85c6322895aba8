#!/usr/bin/env python

import argparse
import configparser
import logging

from aiohttp import web

from tg_login.config import load_config
from tg_login.web_api import RECEIVER_PATH, create_web_app


def main():
    parser = argparse.ArgumentParser(description="Telegram Login Widget receiver")
    parser.add_argument("-c", "--config", type=str, default="config.ini", help="Path to config file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger = logging.getLogger("tg_login")

    config_file = configparser.ConfigParser()
    config_file.read(args.config)
    config = load_config(config_file)

    app = create_web_app(config)
    logger.info("Receiver listening on %s:%d%s", config.api_host, config.api_port, RECEIVER_PATH)
    web.run_app(app, host=config.api_host, port=config.api_port, print=None)


if __name__ == "__main__":
    main()
