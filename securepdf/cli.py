import argparse
import json
import os
import sys
from pathlib import Path

from securepdf.config import Config
from securepdf.config_loader import configure_logging
from securepdf.core.handler import UploadError, UploadHandler
from securepdf.core.sanitize import sanitize_filename


def main(argv=None):
    parser = argparse.ArgumentParser(description="PDF upload service CLI")
    parser.add_argument("--config", default=os.getenv("SECUREPDF_CONFIG_PATH", "securepdf_config.yaml"))
    sub = parser.add_subparsers(dest="cmd")

    s = sub.add_parser("serve", help="Run the upload service")
    s.add_argument("--host", default=os.getenv("SERVICE_HOST"))
    s.add_argument("--port", type=int, default=os.getenv("SERVICE_PORT"))
    s.add_argument("--reload", action="store_true", default=bool(os.getenv("SERVICE_RELOAD")))

    st = sub.add_parser("store", help="Store a local PDF in the upload directory")
    st.add_argument("path", help="Path to the PDF file")

    n = sub.add_parser("sanitize", help="Print the storage name for a filename")
    n.add_argument("name", help="Original filename")

    args = parser.parse_args(argv)

    if args.cmd == "sanitize":
        print(sanitize_filename(args.name))
        return 0

    if args.cmd not in ("serve", "store"):
        parser.print_help()
        return 0

    cfg = Config.from_yaml(args.config)
    configure_logging(cfg.log_level)

    if args.cmd == "serve":
        from securepdf.service.app import serve

        serve(args.config, args.host or cfg.host, args.port or cfg.port, reload=args.reload)
        return 0

    source = Path(args.path)
    if not source.is_file():
        print(f"No such file: {source}", file=sys.stderr)
        return 1

    handler = UploadHandler(cfg.upload_dir, download_prefix=cfg.download_prefix)
    try:
        stored = handler.store(source.name, source.read_bytes())
    except UploadError as e:
        print(json.dumps({"message": e.message}, ensure_ascii=False))
        return 1
    print(json.dumps(stored.to_response(), ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
