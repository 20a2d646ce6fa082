"""Web interface for Humandiff: transform text and highlight what changed."""

from functools import lru_cache
import logging
from typing import Any, Dict, List

from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from humandiff import __version__
from humandiff.config import Settings, configure_logging
from humandiff.data.history import HistoryStore
from humandiff.rewrite.provider import HttpTransformationProvider, TransformationError
from humandiff.rewrite.settings import TransformationRequest, TransformationResponse
from humandiff.service import HumanizeService
from humandiff.text.diff import summarize
from humandiff.text.render import render_html

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Humandiff",
    description="Transform text through a rewriting service and highlight the changes",
    version=__version__,
)


class DiffRequest(BaseModel):
    """Request model for comparing two texts."""

    original: str
    transformed: str


class DiffResponse(BaseModel):
    """Response model for a comparison."""

    segments: List[Dict[str, str]]
    stats: Dict[str, Any]
    html: str


@lru_cache(maxsize=1)
def get_service() -> HumanizeService:
    """Build the shared service from environment settings."""
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    provider = HttpTransformationProvider(
        settings.api_url, timeout=settings.timeout, api_key=settings.api_key
    )
    logger.info(f"Using transformation service at {settings.api_url}")
    return HumanizeService(
        provider,
        history=HistoryStore(settings.history_path),
        window=settings.lookahead_window,
    )


@app.get("/", response_class=HTMLResponse)
async def root():
    """Serve the main web interface."""
    return INDEX_HTML


@app.post("/api/transform")
def transform_text(request: TransformationRequest, service: HumanizeService = Depends(get_service)):
    """Transform the provided text and return it with its comparison."""
    try:
        result = service.transform(request)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except TransformationError as e:
        logger.error(f"Transformation failed: {e}")
        raise HTTPException(status_code=502, detail=f"Transformation failed: {e}")

    data = result.response.model_dump(mode="json", by_alias=True)
    data["segments"] = [segment.to_dict() for segment in result.segments]
    data["stats"] = result.stats.to_dict()
    data["html"] = render_html(result.segments)
    return {"success": True, "data": data}


@app.post("/api/diff", response_model=DiffResponse)
def diff_text(request: DiffRequest, service: HumanizeService = Depends(get_service)):
    """Compare two texts without calling the transformation service."""
    segments = service.diff(request.original, request.transformed)
    return DiffResponse(
        segments=[segment.to_dict() for segment in segments],
        stats=summarize(segments).to_dict(),
        html=render_html(segments),
    )


@app.get("/api/transformations", response_model=list[TransformationResponse], response_model_by_alias=True)
def list_transformations(service: HumanizeService = Depends(get_service)):
    """Return stored transformations, newest first."""
    return service.list_history()


@app.get("/api/transformations/{id}")
def get_transformation(id: str, service: HumanizeService = Depends(get_service)):
    """Restore a stored transformation together with its comparison."""
    try:
        result = service.restore(id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Transformation not found: {id}")
    return {"success": True, "data": result.to_dict()}


@app.delete("/api/transformations/{id}")
def delete_transformation(id: str, service: HumanizeService = Depends(get_service)):
    """Delete a stored transformation."""
    if not service.delete(id):
        raise HTTPException(status_code=404, detail=f"Transformation not found: {id}")
    return {"success": True}


INDEX_HTML = """
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Humandiff - Text Humanizer</title>
    <style>
        * { margin: 0; padding: 0; box-sizing: border-box; }

        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            background: #f4f4f8;
            color: #333;
            display: flex;
            gap: 20px;
            padding: 20px;
        }

        main {
            flex: 1;
            background: white;
            border-radius: 12px;
            padding: 32px;
            max-width: 960px;
        }

        aside {
            width: 300px;
            background: white;
            border-radius: 12px;
            padding: 20px;
        }

        h1 { margin-bottom: 8px; }
        h2 { font-size: 1.1em; margin-bottom: 12px; }
        .subtitle { color: #666; margin-bottom: 24px; }

        label {
            display: block;
            font-weight: 600;
            margin-bottom: 6px;
            font-size: 0.9em;
        }

        textarea {
            width: 100%;
            min-height: 180px;
            padding: 12px;
            border: 2px solid #e0e0e0;
            border-radius: 8px;
            font: inherit;
            resize: vertical;
        }

        .settings {
            display: grid;
            grid-template-columns: repeat(4, 1fr);
            gap: 12px;
            margin: 16px 0;
        }

        select, input[type=range] { width: 100%; }

        button {
            padding: 12px 24px;
            border: none;
            border-radius: 8px;
            font-weight: 600;
            cursor: pointer;
            background: #5b4fd6;
            color: white;
        }

        button:disabled { opacity: 0.6; cursor: not-allowed; }

        .error {
            display: none;
            background: #fee;
            color: #c33;
            padding: 12px;
            border-radius: 8px;
            margin: 16px 0;
        }

        .output {
            margin-top: 24px;
            min-height: 160px;
            padding: 16px;
            border: 1px solid #e0e0e0;
            border-radius: 8px;
            font-family: monospace;
            white-space: pre-wrap;
        }

        .diff-added {
            background: rgba(234, 179, 8, 0.2);
            text-decoration: underline;
            text-decoration-color: rgba(234, 179, 8, 0.5);
        }

        .placeholder { color: #999; }
        .history-item { padding: 10px; border-bottom: 1px solid #eee; cursor: pointer; }
        .history-item small { color: #999; display: block; }
        .history-item .delete { float: right; padding: 2px 8px; background: #eee; color: #333; }
    </style>
</head>
<body>
    <main>
        <h1>Humandiff</h1>
        <p class="subtitle">Rewrite text and see exactly what changed</p>

        <form id="transform-form">
            <label for="input-text">Original text</label>
            <textarea id="input-text" placeholder="Paste your text here..."></textarea>

            <div class="settings">
                <div>
                    <label for="mode">Mode</label>
                    <select id="mode">
                        <option value="paraphrase">Paraphrase</option>
                        <option value="style">Style</option>
                        <option value="tone">Tone</option>
                        <option value="vocabulary">Vocabulary</option>
                    </select>
                </div>
                <div>
                    <label for="audience">Audience</label>
                    <select id="audience">
                        <option value="general">General Audience</option>
                        <option value="academic">Academic</option>
                        <option value="professional">Professional</option>
                        <option value="casual">Casual</option>
                        <option value="technical">Technical</option>
                    </select>
                </div>
                <div>
                    <label for="verbosity">Verbosity</label>
                    <select id="verbosity">
                        <option value="concise">Concise</option>
                        <option value="balanced" selected>Balanced</option>
                        <option value="detailed">Detailed</option>
                    </select>
                </div>
                <div>
                    <label for="formality">Formality: <span id="formality-value">50</span></label>
                    <input type="range" id="formality" min="0" max="100" value="50">
                </div>
            </div>

            <button type="submit" id="transform-btn">Humanize Text</button>
        </form>

        <div class="error" id="error-message"></div>
        <div class="output" id="output">
            <span class="placeholder">Your text will appear here with the changes highlighted.</span>
        </div>
    </main>

    <aside>
        <h2>History</h2>
        <div id="history"></div>
    </aside>

    <script>
        const form = document.getElementById('transform-form');
        const inputText = document.getElementById('input-text');
        const output = document.getElementById('output');
        const errorMsg = document.getElementById('error-message');
        const button = document.getElementById('transform-btn');
        const formality = document.getElementById('formality');
        const historyList = document.getElementById('history');

        formality.addEventListener('input', () => {
            document.getElementById('formality-value').textContent = formality.value;
        });

        function showError(message) {
            errorMsg.textContent = message;
            errorMsg.style.display = 'block';
        }

        async function loadHistory() {
            const response = await fetch('/api/transformations');
            const items = await response.json();
            historyList.innerHTML = '';
            if (items.length === 0) {
                historyList.textContent = 'No transformations yet.';
                return;
            }
            for (const item of items) {
                const entry = document.createElement('div');
                entry.className = 'history-item';
                const del = document.createElement('button');
                del.className = 'delete';
                del.textContent = 'x';
                del.addEventListener('click', async (e) => {
                    e.stopPropagation();
                    await fetch('/api/transformations/' + item.id, { method: 'DELETE' });
                    loadHistory();
                });
                const when = document.createElement('small');
                when.textContent = item.mode + ' - ' + new Date(item.timestamp).toLocaleString();
                const text = document.createElement('div');
                text.textContent = item.originalText.slice(0, 80);
                entry.append(del, when, text);
                entry.addEventListener('click', () => restore(item.id));
                historyList.appendChild(entry);
            }
        }

        async function restore(id) {
            const response = await fetch('/api/transformations/' + id);
            const body = await response.json();
            const item = body.data.transformation;
            inputText.value = item.originalText;
            document.getElementById('mode').value = item.mode;
            document.getElementById('audience').value = item.targetAudience;
            document.getElementById('verbosity').value = item.verbosity;
            formality.value = item.formality;
            document.getElementById('formality-value').textContent = item.formality;
            output.innerHTML = body.data.html;
        }

        form.addEventListener('submit', async (e) => {
            e.preventDefault();
            errorMsg.style.display = 'none';

            if (!inputText.value.trim()) {
                showError('Please enter some text before humanizing.');
                return;
            }

            button.disabled = true;
            button.textContent = 'Humanizing...';
            try {
                const response = await fetch('/api/transform', {
                    method: 'POST',
                    headers: { 'Content-Type': 'application/json' },
                    body: JSON.stringify({
                        originalText: inputText.value,
                        mode: document.getElementById('mode').value,
                        formality: Number(formality.value),
                        targetAudience: document.getElementById('audience').value,
                        verbosity: document.getElementById('verbosity').value,
                        deepHumanization: true,
                    }),
                });

                if (!response.ok) {
                    const error = await response.json();
                    throw new Error(typeof error.detail === 'string' ? error.detail : 'Transformation failed');
                }

                const body = await response.json();
                output.innerHTML = body.data.html;
                loadHistory();
            } catch (err) {
                showError(err.message || 'An error occurred. Please try again.');
            } finally {
                button.disabled = false;
                button.textContent = 'Humanize Text';
            }
        });

        document.addEventListener('keydown', (e) => {
            if ((e.ctrlKey || e.metaKey) && e.key === 'Enter') {
                e.preventDefault();
                form.requestSubmit();
            }
        });

        loadHistory();
    </script>
</body>
</html>
"""


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
