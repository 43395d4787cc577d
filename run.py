"""
Application entry point for the StyleScan API
"""

import os
import sys

import uvicorn

from stylescan.config import API_HOST, API_PORT, LOG_LEVEL, MODEL_DIR


def main():
    """Main entry point"""
    print("🚀 Starting StyleScan API Server...")
    print(f"🌐 Server will be available at: http://{API_HOST}:{API_PORT}")
    print(f"📚 API Documentation: http://{API_HOST}:{API_PORT}/docs")
    print("=" * 60)

    if not MODEL_DIR.exists():
        print(f"ℹ️  No local model directory at {MODEL_DIR}")
        print("   YOLO weights will be fetched by name on first load.")
        print()

    if not os.getenv("GEMINI_API_KEY"):
        print("⚠️  WARNING: GEMINI_API_KEY environment variable not set!")
        print("   Stylist advice will fall back to the measured report.")
        print()

    try:
        uvicorn.run(
            "stylescan.main:create_app",
            factory=True,
            host=API_HOST,
            port=API_PORT,
            log_level=LOG_LEVEL.lower(),
            access_log=True
        )

    except KeyboardInterrupt:
        print("\n🛑 Server stopped by user")
    except Exception as e:
        print(f"❌ Server failed to start: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
