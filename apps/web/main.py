"""FastAPI web application for spm-outdated."""

from typing import Optional

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from spm_outdated.collect import VersionCollector
from spm_outdated.errors import ManifestUnavailable
from spm_outdated.manifest import direct_dependencies_from_source, filter_direct_dependencies
from spm_outdated.resolved import parse_package_resolved

app = FastAPI(
    title="spm-outdated",
    description="Check Swift package dependencies for newer versions",
    version="0.1.0",
)


class CheckRequest(BaseModel):
    """Request model for checking a Package.resolved file."""
    content: str
    manifest: Optional[str] = None
    ignore_prerelease: bool = False
    only_major_updates: bool = False
    ignore_transitive: bool = False


class OutdatedEntry(BaseModel):
    package: str
    current_version: str
    latest_version: str
    url: str


class IgnoredEntry(BaseModel):
    package: str
    url: str
    revision: Optional[str] = None


class CheckResponse(BaseModel):
    """Response model for a dependency check."""
    outdated: list[OutdatedEntry]
    ignored: list[IgnoredEntry]
    checked: int


@app.get("/", response_class=HTMLResponse)
async def home():
    """Serve the main application page."""
    return get_index_html()


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.post("/api/check", response_model=CheckResponse)
async def check_dependencies(request: CheckRequest):
    """Check the pins of a Package.resolved file for newer versions."""
    try:
        content = request.content.strip()
        if not content:
            raise HTTPException(status_code=400, detail="No content provided")

        pins = parse_package_resolved(content)
        if not pins:
            raise HTTPException(status_code=400, detail="No pinned packages found")

        if request.ignore_transitive:
            pins = filter_direct_dependencies(pins, _direct_dependencies(request.manifest))

        collector = VersionCollector()
        collection = await collector.collect(
            pins,
            ignore_prerelease=request.ignore_prerelease,
            only_major_updates=request.only_major_updates,
        )

        report = collection.to_dict()
        return CheckResponse(
            outdated=report["outdated_packages"],
            ignored=report["ignored_packages"],
            checked=len(pins),
        )

    except HTTPException:
        # Re-raise HTTP exceptions (don't convert to 500)
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error checking dependencies: {str(e)}")


@app.post("/api/upload", response_model=CheckResponse)
async def upload_file(
    file: UploadFile = File(...),
    manifest: Optional[UploadFile] = File(None),
    ignore_prerelease: bool = Form(False),
    only_major_updates: bool = Form(False),
    ignore_transitive: bool = Form(False),
):
    """Upload and check a Package.resolved file."""
    try:
        if not file.filename:
            raise HTTPException(status_code=400, detail="No file uploaded")

        text_content = (await file.read()).decode("utf-8")
        manifest_content = (await manifest.read()).decode("utf-8") if manifest else None

        request = CheckRequest(
            content=text_content,
            manifest=manifest_content,
            ignore_prerelease=ignore_prerelease,
            only_major_updates=only_major_updates,
            ignore_transitive=ignore_transitive,
        )

        return await check_dependencies(request)

    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="File must be valid UTF-8 text")
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error processing file: {str(e)}")


def _direct_dependencies(manifest: Optional[str]) -> Optional[list[str]]:
    """Direct dependency names from Package.swift source, None if unavailable."""
    if not manifest:
        return None
    try:
        return direct_dependencies_from_source(manifest)
    except ManifestUnavailable:
        return None


def get_index_html() -> str:
    """Return the main HTML page."""
    return """
    <!DOCTYPE html>
    <html lang="en">
    <head>
        <meta charset="UTF-8">
        <meta name="viewport" content="width=device-width, initial-scale=1.0">
        <title>spm-outdated - Outdated Swift Packages</title>
        <style>
            body { font-family: -apple-system, sans-serif; max-width: 860px; margin: 2rem auto; }
            table { border-collapse: collapse; width: 100%; margin-top: 1rem; }
            td, th { border: 1px solid #ddd; padding: 0.4rem; text-align: left; }
            .muted { color: #777; }
        </style>
    </head>
    <body>
        <h1>spm-outdated</h1>
        <p class="muted">Upload a Package.resolved file to find outdated Swift packages.</p>
        <form id="check-form">
            <input type="file" name="file" accept=".resolved,application/json" required>
            <label><input type="checkbox" name="ignore_prerelease" value="true"> Ignore pre-releases</label>
            <label><input type="checkbox" name="only_major_updates" value="true"> Only major updates</label>
            <button type="submit">Check</button>
        </form>
        <div id="result"></div>
        <script>
            document.getElementById("check-form").addEventListener("submit", async (event) => {
                event.preventDefault();
                const result = document.getElementById("result");
                result.textContent = "Checking...";
                const response = await fetch("/api/upload", { method: "POST", body: new FormData(event.target) });
                const data = await response.json();
                if (!response.ok) {
                    result.textContent = data.detail;
                    return;
                }
                if (data.outdated.length === 0) {
                    result.textContent = "Everything is up-to-date!";
                    return;
                }
                const addRow = (table, cellTag, values) => {
                    const row = table.insertRow();
                    for (const value of values) {
                        const cell = document.createElement(cellTag);
                        cell.textContent = value;
                        row.appendChild(cell);
                    }
                };
                const table = document.createElement("table");
                addRow(table, "th", ["Package", "Current", "Latest", "URL"]);
                for (const p of data.outdated) {
                    addRow(table, "td", [p.package, p.current_version, p.latest_version, p.url]);
                }
                result.replaceChildren(table);
            });
        </script>
    </body>
    </html>
    """
