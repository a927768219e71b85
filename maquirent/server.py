"""
Process runner for MaquiRent

Serves the Flask app with werkzeug's threaded server and handles:
- SIGTERM/SIGINT: stop accepting requests and exit 0
- Uncaught exceptions: logged, then exit 1
- Keep-alive heartbeat: logs uptime at a fixed interval
"""

import signal
import sys
import threading
import time

from werkzeug.serving import make_server

from maquirent.utils.logger import get_logger

logger = get_logger("maquirent.server")


class KeepAlive:
    """Background thread that logs a heartbeat every interval seconds."""

    def __init__(self, interval, started_at=None, clock=time.monotonic):
        self.interval = interval
        self._clock = clock
        self._started_at = started_at if started_at is not None else clock()
        self._stop = threading.Event()
        self._thread = None

    def beat(self):
        uptime = int(self._clock() - self._started_at)
        logger.info(f"Keep alive - uptime {uptime}s")
        return uptime

    def _run(self):
        while not self._stop.wait(self.interval):
            self.beat()

    def start(self):
        self._thread = threading.Thread(target=self._run, name="keep-alive", daemon=True)
        self._thread.start()

    def stop(self):
        self._stop.set()


def log_uncaught_exception(exc_type, exc_value, exc_traceback):
    """sys.excepthook: log the error and exit with status 1."""
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc_value, exc_traceback)
        return
    logger.critical("Uncaught exception", exc_info=(exc_type, exc_value, exc_traceback))
    sys.exit(1)


def log_thread_exception(args):
    logger.critical(
        f"Uncaught exception in thread {args.thread.name if args.thread else '?'}",
        exc_info=(args.exc_type, args.exc_value, args.exc_traceback),
    )


class AppServer:
    """
    Args:
        app: Flask application
        host: Interface to bind
        port: Port to listen on
    """

    def __init__(self, app, host, port):
        self.app = app
        self.host = host
        self.port = port
        self._server = make_server(host, port, app, threaded=True)
        self.keep_alive = KeepAlive(
            app.config['KEEP_ALIVE_SECONDS'],
            started_at=app.extensions['maquirent.started_at'],
        )
        self._stopping = threading.Event()
        self.shutdown_thread = None

    def handle_signal(self, signum, frame):
        name = signal.Signals(signum).name
        if self._stopping.is_set():
            return
        self._stopping.set()
        logger.info(f"{name} received, shutting down server gracefully...")
        # shutdown() blocks until serve_forever() returns, so call it off the main thread
        self.shutdown_thread = threading.Thread(target=self._server.shutdown, name="shutdown", daemon=True)
        self.shutdown_thread.start()

    def install_handlers(self):
        signal.signal(signal.SIGTERM, self.handle_signal)
        signal.signal(signal.SIGINT, self.handle_signal)
        sys.excepthook = log_uncaught_exception
        threading.excepthook = log_thread_exception

    def serve_forever(self):
        self.install_handlers()
        self.keep_alive.start()

        logger.info(f"MaquiRent server running on port {self.port}")
        logger.info(f"Application: http://localhost:{self.port}")
        logger.info(f"Health check: http://localhost:{self.port}/health")
        logger.info(f"API status: http://localhost:{self.port}/api/status")
        logger.info(f"Environment: {self.app.config['APP_ENV']}")

        try:
            self._server.serve_forever()
        finally:
            self.keep_alive.stop()
            self._server.server_close()
            logger.info("Server closed")
