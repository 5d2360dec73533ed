from flask_restx import Namespace, Resource, fields

from tourism_app.routes import json_payload, parse_number
from tourism_app.services import demotable as service
from tourism_app.services.exceptions import DataAccessError

ns = Namespace('demotable', description='Демонстрационная таблица', path='/')

demo_row_model = ns.model('DemoRow', {
    'id':   fields.Integer(required=True),
    'name': fields.String(required=True),
})

rename_model = ns.model('DemoRename', {
    'oldName': fields.String(required=True),
    'newName': fields.String(required=True),
})


@ns.route('/demotable')
class DemoTable(Resource):

    @ns.response(200, 'OK')
    @ns.response(500, 'Ошибка БД')
    def get(self):
        """Все строки демо-таблицы"""
        try:
            return {'data': service.fetch_demotable()}
        except DataAccessError:
            return {'data': []}, 500


@ns.route('/insert-demotable')
class InsertDemoTable(Resource):

    @ns.expect(demo_row_model)
    @ns.response(200, 'OK')
    @ns.response(400, 'Неправильный запрос')
    @ns.response(500, 'Ошибка вставки')
    def post(self):
        data = json_payload()
        row_id = parse_number(data.get('id'), int)
        if row_id is None:
            return {'success': False}, 400
        try:
            inserted = service.insert_demotable(row_id, data.get('name'))
        except DataAccessError:
            inserted = False
        if inserted:
            return {'success': True}
        return {'success': False}, 500


@ns.route('/update-name-demotable')
class UpdateNameDemoTable(Resource):

    @ns.expect(rename_model)
    @ns.response(200, 'OK')
    @ns.response(500, 'Нет совпадений или ошибка БД')
    def post(self):
        data = json_payload()
        try:
            updated = service.update_name_demotable(data.get('oldName'), data.get('newName'))
        except DataAccessError:
            updated = False
        if updated:
            return {'success': True}
        return {'success': False}, 500


@ns.route('/count-demotable')
class CountDemoTable(Resource):

    @ns.response(200, 'OK')
    @ns.response(500, 'Ошибка БД')
    def get(self):
        try:
            count = service.count_demotable()
        except DataAccessError:
            return {'success': False, 'count': -1}, 500
        return {'success': True, 'count': count}
