"""
tilewm - Entry point.

Run with:  python -m tilewm
"""

import logging
import sys


class SafeStreamHandler(logging.StreamHandler):
    """Handler that replaces unencodable characters instead of crashing."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            enc = getattr(self.stream, "encoding", "utf-8") or "utf-8"
            safe = msg.encode(enc, errors="replace").decode(enc, errors="replace")
            self.stream.write(safe + self.terminator)
            self.flush()
        except Exception:
            self.handleError(record)


def setup_logging(level: int = logging.DEBUG) -> None:
    """Configure logging for the WM."""
    fmt = "%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s: %(message)s"
    handler = SafeStreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)

    # Every window event arranges; keep the per-pass detail out of the way
    logging.getLogger("tilewm.tiling.engine").setLevel(logging.INFO)


def main() -> None:
    setup_logging()

    if sys.platform != "win32":
        logging.getLogger(__name__).error(
            "No host adapter for platform %r (only win32 is built in)", sys.platform
        )
        sys.exit(1)

    from tilewm.core.win32_driver import Win32Driver

    driver = Win32Driver()
    driver.start()

    print("\n" + driver.engine.dump_state() + "\n")
    print("=" * 60)
    print("  tilewm running. Press Ctrl+C to stop.")
    print(f"  Screens: {len(driver.engine.screens)}")
    print("=" * 60 + "\n")

    try:
        driver.run()
    except KeyboardInterrupt:
        driver.stop()

    print("\n" + driver.engine.dump_state())


if __name__ == "__main__":
    main()
