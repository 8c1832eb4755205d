import logging
import argparse
import sys

from core.config_loader import load_config
from core.match_requests.service import MatchRequestService
from database.init_db import init_db
from database.uow import boxing_uow

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def run_server():
    from web.backend.app import main as serve
    serve()


def run_expiry_sweep() -> int:
    """Expire every PENDING match request past its expiry, once."""
    config = load_config()
    with boxing_uow() as repos:
        service = MatchRequestService(
            repos.match_requests,
            repos.boxers,
            rules=config.matching.rules,
            policy=config.match_requests
        )
        return service.expire_old_requests()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Boxing match-making backend")
    subparsers = parser.add_subparsers(dest='command', required=True)
    subparsers.add_parser('serve', help='Run the HTTP API (uvicorn)')
    subparsers.add_parser('init-db', help='Create database tables')
    subparsers.add_parser('expire-requests', help='Expire overdue PENDING match requests once')
    args = parser.parse_args(argv)

    if args.command == 'serve':
        run_server()
    elif args.command == 'init-db':
        init_db()
        logger.info("Database initialized")
    elif args.command == 'expire-requests':
        count = run_expiry_sweep()
        print(f"Expired {count} match requests")
    return 0


if __name__ == "__main__":
    sys.exit(main())
