"""
FastAPI Server for the Media Stream System.

This module builds the FastAPI application, mounts the media routes and runs
uvicorn in a background thread.
"""

import logging
import threading
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from ..core.config import Config
from ..storage.manager import StorageManager
from ..video.integration import VideoModule, create_video_module
from .models import SuccessResponse, HealthResponse, SystemStatusResponse


class APIServer:
    """FastAPI server for the Media Stream System"""

    def __init__(self, config: Config, storage_manager: StorageManager, video_module: Optional[VideoModule] = None):
        self.config = config
        self.storage_manager = storage_manager
        self.video_module = video_module or create_video_module(config, storage_manager)
        self.logger = logging.getLogger(__name__)

        # FastAPI app
        self.app = FastAPI(
            title="Media Stream System API",
            description="Byte-range streaming of stored media",
            version="1.0.0",
            lifespan=self._lifespan,
        )

        # Server state
        self.server_start_time = datetime.now()
        self.running = False
        self._server: Optional[uvicorn.Server] = None
        self._server_thread: Optional[threading.Thread] = None

        # Range requests need these headers visible to browser players
        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=self.config.system.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["Accept-Ranges", "Content-Range", "Content-Length"],
        )

        self._setup_routes()

    @asynccontextmanager
    async def _lifespan(self, app: FastAPI):
        self.logger.info("API application startup")
        yield
        # In-flight view increments must finish or be logged before exit
        await self.video_module.cleanup()
        self.logger.info("API application shutdown complete")

    def _setup_routes(self):
        """Setup API routes"""

        @self.app.get("/", response_model=SuccessResponse)
        async def root():
            return SuccessResponse(message="Media Stream System API")

        @self.app.get("/health", response_model=HealthResponse)
        async def health_check():
            return HealthResponse(status="healthy", timestamp=datetime.now().isoformat())

        @self.app.get("/system/status", response_model=SystemStatusResponse)
        async def get_system_status():
            """Get overall system status"""
            try:
                return SystemStatusResponse(
                    running=self.running,
                    uptime_seconds=(datetime.now() - self.server_start_time).total_seconds(),
                    media_count=len(self.storage_manager.list_media(limit=None)),
                    video_module=self.video_module.get_module_status(),
                )
            except Exception as e:
                self.logger.error(f"Error getting system status: {e}")
                raise HTTPException(status_code=500, detail=str(e))

        self.app.include_router(self.video_module.get_api_routes())

    def start(self) -> bool:
        """Start the API server"""
        if self.running:
            self.logger.warning("API server is already running")
            return True

        if not self.config.system.enable_api:
            self.logger.info("API server disabled in configuration")
            return False

        try:
            self.logger.info(f"Starting API server on {self.config.system.api_host}:{self.config.system.api_port}")
            server_config = uvicorn.Config(self.app, host=self.config.system.api_host, port=self.config.system.api_port, log_level="info")
            self._server = uvicorn.Server(server_config)
            self.running = True

            # Start server in separate thread
            self._server_thread = threading.Thread(target=self._run_server, daemon=True)
            self._server_thread.start()

            return True

        except Exception as e:
            self.logger.error(f"Error starting API server: {e}")
            self.running = False
            return False

    def stop(self, timeout: Optional[float] = None) -> None:
        """Stop the API server and wait for its lifespan shutdown"""
        if not self.running:
            return

        self.logger.info("Stopping API server...")
        if self._server:
            self._server.should_exit = True

        if self._server_thread:
            wait = timeout if timeout is not None else self.config.accounting.shutdown_timeout_seconds + 5
            self._server_thread.join(wait)
            if self._server_thread.is_alive():
                self.logger.warning("API server thread did not stop in time")

        self.running = False
        self.logger.info("API server stopped")

    def _run_server(self) -> None:
        """Run the uvicorn server"""
        try:
            self._server.run()
        except Exception as e:
            self.logger.error(f"Error running API server: {e}")
        finally:
            self.running = False

    def is_running(self) -> bool:
        """Check if API server is running"""
        return self.running

    def get_server_info(self) -> Dict[str, Any]:
        """Get server information"""
        return {"running": self.running, "host": self.config.system.api_host, "port": self.config.system.api_port, "start_time": self.server_start_time.isoformat(), "uptime_seconds": (datetime.now() - self.server_start_time).total_seconds()}
