import os
import subprocess
import logging

from exceptions import ToolInvocationError

logger = logging.getLogger(__name__)


def build_command(input_path, output_path, profile, gs_binary='gs'):
    resolution = profile.image_resolution
    return [
        gs_binary,
        '-sDEVICE=pdfwrite',
        '-dCompatibilityLevel=1.4',
        f'-dPDFSETTINGS={profile.pdf_settings}',
        '-dNOPAUSE',
        '-dQUIET',
        '-dBATCH',
        '-dDetectDuplicateImages=true',
        f'-dColorImageResolution={resolution}',
        f'-dGrayImageResolution={resolution}',
        f'-dMonoImageResolution={resolution}',
        f'-sOutputFile={output_path}',
        input_path,
    ]


def _decode(output):
    # Ghostscript echoes raw PDF strings, which are often not UTF-8
    if not output:
        return ''
    if isinstance(output, bytes):
        output = output.decode('utf-8', errors='replace')
    return output.strip()


def _discard(path):
    if os.path.exists(path):
        try:
            os.unlink(path)
        except OSError as e:
            logger.warning(f"Could not remove partial output {path}: {e}")


def compress_pdf(input_path, output_path, profile, gs_binary='gs', timeout=None):
    """
    Run Ghostscript once over input_path and write output_path.

    Succeeds only when Ghostscript exits with status 0 and the output file
    exists. Anything else removes the partial output and raises
    ToolInvocationError carrying Ghostscript's diagnostics.
    """
    cmd = build_command(input_path, output_path, profile, gs_binary)
    logger.info(f"Executing Ghostscript ({profile.level}): {' '.join(cmd)}")

    original_size = os.path.getsize(input_path)

    try:
        result = subprocess.run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        logger.error(f"Ghostscript timed out after {timeout}s on {input_path}")
        _discard(output_path)
        raise ToolInvocationError(f"Ghostscript did not finish within {timeout} seconds")
    except OSError as e:
        logger.error(f"Ghostscript run error: {e}")
        _discard(output_path)
        raise ToolInvocationError(str(e))

    stderr = _decode(result.stderr)

    if result.returncode != 0:
        logger.error(f"Ghostscript exit code {result.returncode}: {stderr}")
        _discard(output_path)
        detail = stderr or _decode(result.stdout) or f"exit status {result.returncode}"
        raise ToolInvocationError(detail, returncode=result.returncode)

    if not os.path.exists(output_path):
        logger.error(f"Ghostscript exited cleanly but wrote no file at {output_path}")
        raise ToolInvocationError(stderr or 'Ghostscript produced no output file', returncode=0)

    if stderr:
        logger.warning(f"Ghostscript stderr (warnings/info): {stderr}")

    final_size = os.path.getsize(output_path)
    reduction = ((original_size - final_size) / original_size) * 100 if original_size > 0 else 0
    logger.info(f"Compression complete: {original_size} -> {final_size} bytes ({reduction:.1f}% reduction)")
