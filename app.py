import os
import logging

from flask import Flask, request, send_file, jsonify
from flask_cors import CORS
from werkzeug.exceptions import RequestEntityTooLarge

from compressor import compress_pdf
from exceptions import CompressorError, MissingUploadError, UnsupportedFileTypeError
from profiles import get_profile
from settings import PORT, configure_logging, default_config
from storage import StagingArea

# Configure logging
configure_logging()
logger = logging.getLogger(__name__)

PDF_MIMETYPE = 'application/pdf'


def _get_upload():
    upload = request.files.get('pdfFile') or request.files.get('file')
    if not upload:
        raise MissingUploadError()

    ext = os.path.splitext(upload.filename)[1].lower()
    if ext != '.pdf' and upload.mimetype != PDF_MIMETYPE:
        raise UnsupportedFileTypeError(upload.filename)
    return upload


def _requested_level():
    return request.form.get('compressionLevel') or request.form.get('level')


def _download_response(path, staging):
    """
    Stream path back as an attachment. The file is released when the WSGI
    server closes the response, whether or not the client read all of it.
    """
    size = os.path.getsize(path)
    name = os.path.basename(path)

    response = send_file(path, as_attachment=True, download_name=name, mimetype=PDF_MIMETYPE)
    # Passthrough bodies never reach Response.close, which runs the callbacks below
    response.direct_passthrough = False

    body = response.response
    sent = [0]

    def count_chunks():
        for chunk in body:
            sent[0] += len(chunk)
            yield chunk

    response.response = count_chunks()

    def finish_delivery():
        if hasattr(body, 'close'):
            body.close()
        if sent[0] < size:
            logger.warning(f"DeliveryError: transfer of {name} stopped after {sent[0]} of {size} bytes")
        else:
            logger.info(f"Delivered {name} ({size} bytes)")
        staging.release(path)

    response.call_on_close(finish_delivery)
    return response


def create_app(config=None):
    app = Flask(__name__)
    app.config.update(default_config())
    if config:
        app.config.update(config)

    CORS(app, resources={r"/*": {"origins": app.config['CORS_ORIGINS']}}, expose_headers=['Content-Disposition'])

    staging = StagingArea(app.config['UPLOAD_DIR'], app.config['COMPRESSED_DIR'])
    staging.ensure_directories()
    app.extensions['staging'] = staging

    @app.errorhandler(CompressorError)
    def handle_compressor_error(e):
        if e.status_code >= 500:
            logger.error(f"{type(e).__name__}: {e.message}")
        else:
            logger.warning(f"Rejected request ({type(e).__name__}): {e.message}")
        return jsonify({'message': e.message}), e.status_code

    @app.errorhandler(RequestEntityTooLarge)
    def handle_file_too_large(e):
        logger.error(f"File too large error: {e}")
        limit_mb = app.config['MAX_CONTENT_LENGTH'] // (1024 * 1024)
        return jsonify({'message': f'File too large. Maximum upload size is {limit_mb}MB.'}), 413

    @app.errorhandler(500)
    def handle_internal_error(e):
        logger.error(f"Internal Server Error: {e}")
        return jsonify({'message': 'Internal server error. Check the server log.'}), 500

    @app.route('/')
    def index():
        return "PDF compressor is running!"

    @app.route('/compress-pdf', methods=['POST'])
    def compress_pdf_route():
        logger.info("Received compress request")

        upload = _get_upload()
        profile = get_profile(_requested_level())

        try:
            input_path = staging.stage_upload(upload)
        except OSError as e:
            raise CompressorError(f"Could not store the uploaded file: {e}") from e

        output_path = staging.allocate_output(upload.filename)
        try:
            compress_pdf(
                input_path,
                output_path,
                profile,
                gs_binary=app.config['GS_BINARY'],
                timeout=app.config['GS_TIMEOUT'],
            )
            response = _download_response(output_path, staging)
        except Exception:
            staging.release(output_path)
            raise
        finally:
            staging.release(input_path)

        logger.info(f"PDF compressed successfully: {output_path}")
        return response

    return app


if __name__ == '__main__':
    app = create_app()
    app.run(host='0.0.0.0', port=PORT, threaded=True)
