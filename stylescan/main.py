"""
FastAPI application with all endpoints for the StyleScan API
"""

import logging
from datetime import datetime
from typing import Dict, Optional

from fastapi import FastAPI, File, Form, HTTPException, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .config import (
    ACCESSORY_LABELS, API_DESCRIPTION, API_TITLE, API_VERSION,
    FINDING_CONFIDENCE_THRESHOLD, LOAD_MODELS_ON_STARTUP,
    MAX_PROMPT_LENGTH, MAX_REQUEST_SIZE
)
from .models.llm_generator import StylistAdviceGenerator, StylistServiceError
from .models.outfit_analyzer import OutfitAnalyzer
from .models.raster import InvalidImageData
from .utils import ImageHandler, configure_logging

logger = logging.getLogger(__name__)


class AnalyzeOutfitRequest(BaseModel):
    """JSON body: data-URL encoded image plus the user's question/context"""
    image: Optional[str] = None
    prompt: Optional[str] = None


class HealthResponse(BaseModel):
    """Response model for health check"""
    status: str
    models: Dict[str, bool]
    device: str


def _analyzer(app: FastAPI) -> OutfitAnalyzer:
    loader = app.state.model_loader
    return OutfitAnalyzer(segmenter=loader.segmenter, detector=loader.detector)


def _advisor(app: FastAPI) -> StylistAdviceGenerator:
    return StylistAdviceGenerator(app.state.model_loader.gemini_model)


def _check_prompt(prompt: Optional[str]) -> None:
    if prompt and len(prompt) > MAX_PROMPT_LENGTH:
        raise HTTPException(
            status_code=400,
            detail=f"Prompt too long. Maximum length is {MAX_PROMPT_LENGTH} characters."
        )


def create_app(model_loader=None, load_models: bool = LOAD_MODELS_ON_STARTUP) -> FastAPI:
    """
    Build the FastAPI application

    Args:
        model_loader: Model handle shared by the endpoints; a ModelLoader is created when None
        load_models: Load the models on startup
    """
    configure_logging()

    if model_loader is None:
        from .services import ModelLoader
        model_loader = ModelLoader()

    app = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["POST", "GET", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    app.state.model_loader = model_loader
    app.state.image_handler = ImageHandler()

    @app.on_event("startup")
    async def startup_event():
        """Load models on startup"""
        logger.info("Starting StyleScan API...")
        if load_models:
            await run_in_threadpool(model_loader.load_all_models)
        logger.info("API startup complete")

    @app.on_event("shutdown")
    async def shutdown_event():
        """Release models on shutdown"""
        logger.info("Shutting down API...")
        if hasattr(model_loader, 'unload_models'):
            model_loader.unload_models()

    @app.get("/")
    @app.get("/api/info")
    async def api_info():
        """API information endpoint"""
        return {
            "message": API_TITLE,
            "version": API_VERSION,
            "status": "running",
            "docs": "/docs",
            "endpoints": {
                "analyze": "POST /analyze - Analyze an uploaded outfit photo",
                "analyze_outfit": "POST /api/analyze-outfit - Analyze a data-URL image with a prompt",
                "accessories": "GET /accessories - Accessory labels reported as findings",
                "health": "GET /health - Health check"
            }
        }

    @app.get("/accessories")
    async def get_accessories():
        """Labels kept as accessory findings"""
        return {
            "labels": list(ACCESSORY_LABELS),
            "confidence_threshold": FINDING_CONFIDENCE_THRESHOLD,
            "total_count": len(ACCESSORY_LABELS)
        }

    @app.post("/analyze")
    async def analyze_outfit(
        request: Request,
        file: UploadFile = File(..., description="Outfit image file"),
        context: str = Form("", description="Occasion or question, e.g. 'office interview'"),
        include_advice: bool = Form(False, description="Include Gemini stylist advice")
    ):
        """
        Analyze an uploaded outfit photo

        - **file**: JPEG, PNG or WebP image
        - **context**: Optional occasion or question
        - **include_advice**: Also ask the stylist model for advice
        """
        start_time = datetime.now()
        _check_prompt(context)

        content = await file.read()
        handler = request.app.state.image_handler

        is_valid, error_message = handler.validate_upload(content, file.content_type)
        if not is_valid:
            raise HTTPException(status_code=400, detail=error_message)

        image = await run_in_threadpool(handler.rasterize, content)
        report = await run_in_threadpool(_analyzer(request.app).analyze_photo, image, context)

        result = {
            'report': report.to_dict(),
            'markdown': report.to_markdown(),
            'image': {'width': image.width, 'height': image.height},
        }

        if include_advice:
            advice = await run_in_threadpool(
                _advisor(request.app).generate_advice, report, content, file.content_type
            )
            result['advice'] = advice

        processing_time = (datetime.now() - start_time).total_seconds()
        result.update({
            'timestamp': start_time.isoformat(),
            'processing_time_seconds': round(processing_time, 2),
        })

        return JSONResponse(content=result)

    @app.post("/api/analyze-outfit")
    async def analyze_outfit_data_url(body: AnalyzeOutfitRequest, request: Request):
        """
        Analyze a base64 data-URL image together with the user's prompt

        Returns the stylist's Markdown analysis and the measured report.
        """
        content_length = int(request.headers.get('content-length') or 0)
        if content_length > MAX_REQUEST_SIZE:
            return JSONResponse(status_code=413, content={"error": "Request too large"})

        if not body.image or not body.prompt:
            return JSONResponse(status_code=400, content={"error": "Missing image or prompt"})

        if len(body.prompt) > MAX_PROMPT_LENGTH:
            return JSONResponse(
                status_code=400,
                content={"error": f"Prompt too long. Maximum length is {MAX_PROMPT_LENGTH} characters."}
            )

        handler = request.app.state.image_handler
        is_valid, error_message, mime_type, content = handler.decode_data_url(body.image)
        if not is_valid:
            return JSONResponse(status_code=400, content={"error": error_message})

        image = await run_in_threadpool(handler.rasterize, content)
        report = await run_in_threadpool(_analyzer(request.app).analyze_photo, image, body.prompt)

        try:
            advice = await run_in_threadpool(
                _advisor(request.app).generate_advice, report, content, mime_type, False
            )
        except StylistServiceError as e:
            return JSONResponse(status_code=e.status_code, content={"error": e.message})

        return JSONResponse(content={
            'analysis': advice['analysis'],
            'ai_suggestions_available': advice['ai_suggestions_available'],
            'report': report.to_dict(),
        })

    @app.get("/health", response_model=HealthResponse)
    async def health_check(request: Request):
        """Health of the API and its model collaborators"""
        model_status = request.app.state.model_loader.get_model_status()

        critical_services = [
            model_status['detector_loaded'],
            model_status['segmenter_loaded']
        ]
        overall_status = "healthy" if all(critical_services) else "degraded"

        return HealthResponse(
            status=overall_status,
            models={
                "detector": model_status['detector_loaded'],
                "segmenter": model_status['segmenter_loaded'],
                "gemini": model_status['gemini_loaded']
            },
            device=model_status['device']
        )

    @app.exception_handler(InvalidImageData)
    async def invalid_image_handler(request, exc):
        """Undecodable or malformed image data"""
        return JSONResponse(status_code=400, content={"error": "Invalid image data", "message": str(exc)})

    @app.exception_handler(404)
    async def not_found_handler(request, exc):
        """Handle 404 errors"""
        return JSONResponse(
            status_code=404,
            content={
                "error": "Endpoint not found",
                "message": f"The endpoint {request.url.path} does not exist",
                "available_endpoints": [
                    "/", "/docs", "/api/info", "/accessories",
                    "/analyze", "/api/analyze-outfit", "/health"
                ]
            }
        )

    @app.exception_handler(500)
    async def internal_error_handler(request, exc):
        """Handle 500 errors"""
        logger.exception("Unhandled error on %s", request.url.path)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "message": "An unexpected error occurred",
                "timestamp": datetime.now().isoformat()
            }
        )

    return app


__all__ = ["create_app", "AnalyzeOutfitRequest"]
