import sys
import os
import argparse
import logging

# Add parent directory to path so we can import app modules
current_dir = os.path.dirname(os.path.abspath(__file__))
parent_dir = os.path.dirname(current_dir)
sys.path.append(parent_dir)

import app
from auth import set_user_pin
from exceptions import OpsBoardException

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def reset_pin(name, pin):
    """Reset the PIN for a user, creating an admin if the name is unknown."""
    logger.info(f"Attempting to reset PIN for user: {name}")

    with app.create_app({'NOTE_EXPIRY_SWEEP_SECONDS': 0}).app_context():
        try:
            set_user_pin(name, pin)
            logger.info("PIN updated successfully.")
            return True
        except OpsBoardException as e:
            logger.error(f"Failed to reset PIN: {e.message}")
            return False


def main():
    parser = argparse.ArgumentParser(description="Reset a board user's PIN")
    parser.add_argument("name", help="User name (case-insensitive)")
    parser.add_argument("pin", help="New PIN")

    args = parser.parse_args()

    if reset_pin(args.name, args.pin):
        print("SUCCESS")
        sys.exit(0)
    else:
        print("FAILURE")
        sys.exit(1)


if __name__ == "__main__":
    main()
