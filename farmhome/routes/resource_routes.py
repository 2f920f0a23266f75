"""Generic CRUD + CSV router shared by every tabular resource

Each resource gets list (paginated), all, get, create, patch, delete,
import-csv and export-csv under its url_prefix.
"""
import io
import logging
import math

from bson.errors import InvalidId
from flask import Blueprint, current_app, jsonify, request, send_file
from pymongo.errors import BulkWriteError, DuplicateKeyError

from farmhome.models.base import ValidationError
from farmhome.routes.auth_routes import token_required
from farmhome.utils.csv_helper import export_csv, read_csv_rows

logger = logging.getLogger(__name__)


def _positive_int(value, default):
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


def pagination_args():
    """Read page/limit query parameters, falling back to defaults"""
    page = _positive_int(request.args.get('page'), 1)
    limit = _positive_int(request.args.get('limit'), current_app.config.get('DEFAULT_PAGE_LIMIT', 10))
    return page, limit


def _duplicate_message(error):
    if isinstance(error, BulkWriteError):
        write_errors = error.details.get('writeErrors', [])
        if write_errors:
            return write_errors[0].get('errmsg', str(error))
    return str(error)


def create_resource_blueprint(resource):
    """Build the blueprint for one Resource subclass"""
    bp = Blueprint(resource.collection_name, __name__, url_prefix=resource.url_prefix)
    label = resource.label
    list_key = resource.list_key
    item_key = resource.item_key

    @bp.route('', methods=['GET'])
    @token_required
    def list_records():
        """Paginated list, newest first"""
        page, limit = pagination_args()
        try:
            records, total = resource.paginate(page, limit)
            return jsonify({
                list_key: records,
                'total': total,
                'page': page,
                'totalPages': math.ceil(total / limit),
            })
        except Exception as e:
            logger.error(f"Error listing {resource.collection_name}: {str(e)}")
            return jsonify({'error': str(e)}), 500

    @bp.route('/all', methods=['GET'])
    @token_required
    def all_records():
        """Every record, unpaginated"""
        try:
            return jsonify({list_key: resource.find_all()})
        except Exception as e:
            logger.error(f"Error fetching all {resource.collection_name}: {str(e)}")
            return jsonify({'error': str(e)}), 500

    @bp.route('/<record_id>', methods=['GET'])
    @token_required
    def get_record(record_id):
        """Fetch one record by id"""
        try:
            record = resource.find_by_id(record_id)
        except InvalidId:
            return jsonify({'error': 'Invalid id'}), 400
        if not record:
            return jsonify({'error': f'{label} not found'}), 404
        return jsonify({item_key: record})

    @bp.route('', methods=['POST'])
    @token_required
    def create_record():
        """Create a record"""
        try:
            record = resource.create(request.get_json(silent=True))
            return jsonify({'message': f'{label} created successfully', item_key: record}), 201
        except ValidationError as e:
            return jsonify({'error': str(e)}), 400
        except DuplicateKeyError as e:
            return jsonify({'error': _duplicate_message(e)}), 400
        except Exception as e:
            logger.error(f"Error creating {label}: {str(e)}")
            return jsonify({'error': str(e)}), 500

    @bp.route('/<record_id>', methods=['PATCH'])
    @token_required
    def update_record(record_id):
        """Update a record"""
        try:
            record = resource.update(record_id, request.get_json(silent=True))
            if not record:
                return jsonify({'error': f'{label} not found'}), 404
            return jsonify({'message': f'{label} updated successfully', item_key: record})
        except InvalidId:
            return jsonify({'error': 'Invalid id'}), 400
        except ValidationError as e:
            return jsonify({'error': str(e)}), 400
        except Exception as e:
            logger.error(f"Error updating {label} {record_id}: {str(e)}")
            return jsonify({'error': str(e)}), 500

    @bp.route('/<record_id>', methods=['DELETE'])
    @token_required
    def delete_record(record_id):
        """Delete a record"""
        try:
            record = resource.delete(record_id)
            if not record:
                return jsonify({'error': f'{label} not found'}), 404
            return jsonify({'message': f'{label} deleted successfully', item_key: record})
        except InvalidId:
            return jsonify({'error': 'Invalid id'}), 400
        except Exception as e:
            logger.error(f"Error deleting {label} {record_id}: {str(e)}")
            return jsonify({'error': str(e)}), 500

    @bp.route('/import-csv', methods=['POST'])
    @token_required
    def import_records():
        """Import records from an uploaded CSV file (multipart field 'file')"""
        upload = request.files.get('file')
        if not upload:
            return jsonify({'error': 'CSV file is required'}), 400
        invalid = []
        try:
            numbered, invalid = read_csv_rows(upload.read(), resource.fields)
            documents, rejected = resource.import_rows(
                [row for _, row in numbered],
                row_numbers=[row_number for row_number, _ in numbered]
            )
            invalid = sorted(invalid + rejected, key=lambda entry: entry['row'])
            if not documents:
                return jsonify({'error': 'No valid rows found in CSV', 'invalid': invalid}), 400
            inserted_ids = resource.insert_many(documents)
            logger.info(f"Imported {len(inserted_ids)} {resource.collection_name} from CSV")
            return jsonify({
                'message': f'{label}s imported successfully',
                'insertedCount': len(inserted_ids),
                'invalid': invalid,
            })
        except UnicodeDecodeError as e:
            return jsonify({'error': f'CSV must be UTF-8 encoded: {e}'}), 400
        except (DuplicateKeyError, BulkWriteError) as e:
            # Ordered inserts stop at the first duplicate; earlier rows stay stored
            inserted = e.details.get('nInserted', 0) if isinstance(e, BulkWriteError) else 0
            logger.warning(f"Import of {resource.collection_name} stopped after {inserted} rows: {str(e)}")
            return jsonify({
                'error': _duplicate_message(e),
                'insertedCount': inserted,
                'invalid': invalid,
            }), 400
        except Exception as e:
            logger.error(f"Error importing {resource.collection_name}: {str(e)}")
            return jsonify({'error': str(e)}), 500

    @bp.route('/export-csv', methods=['GET'])
    @token_required
    def export_records():
        """Download every record as CSV"""
        try:
            data = export_csv(resource.export_rows(), resource.fields)
            return send_file(
                io.BytesIO(data),
                mimetype='text/csv',
                as_attachment=True,
                download_name=resource.csv_filename
            )
        except Exception as e:
            logger.error(f"Error exporting {resource.collection_name}: {str(e)}")
            return jsonify({'error': str(e)}), 500

    return bp
