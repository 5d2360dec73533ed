from flask_restx import Namespace, Resource, fields

from tourism_app.routes import json_payload, parse_number
from tourism_app.services import attractions as service
from tourism_app.services.exceptions import DataAccessError, LocationConflictError

# path='/' — маршруты без префикса: /get-attractions, /add-attraction, ...
ns = Namespace('attractions', description='Достопримечательности и локации', path='/')

location_model = ns.model('LocationFilter', {
    'province': fields.String(required=True, description="Провинция"),
    'city':     fields.String(required=True, description="Город"),
})

attraction_model = ns.model('NewAttraction', {
    'name':        fields.String(required=True, description="Название"),
    'description': fields.String(description="Описание"),
    'open':        fields.String(description="Время открытия"),
    'close':       fields.String(description="Время закрытия"),
    'lat':         fields.Float(required=True, description="Широта"),
    'long':        fields.Float(required=True, description="Долгота"),
    'category':    fields.String(description="Категория"),
    'province':    fields.String(required=True, description="Провинция"),
    'city':        fields.String(required=True, description="Город"),
})

having_model = ns.model('CountHaving', {
    'province': fields.String(description="Провинция (необязательно)"),
    'city':     fields.String(description="Город (необязательно)"),
    'minCount': fields.Integer(required=True, description="Порог числа достопримечательностей"),
})

update_model = ns.model('AttractionUpdate', {
    'id':             fields.Integer(required=True, description="ID достопримечательности"),
    'newname':        fields.String,
    'newlat':         fields.Float,
    'newlong':        fields.Float,
    'newopen':        fields.String,
    'newclose':       fields.String,
    'newdescription': fields.String,
    'newcategory':    fields.String,
})

delete_model = ns.model('AttractionDelete', {
    'attractionID': fields.Integer(required=True, description="ID достопримечательности"),
})


@ns.route('/get-attractions')
class AttractionsByLocation(Resource):

    @ns.expect(location_model)
    @ns.response(200, 'OK')
    @ns.response(500, 'Ошибка БД')
    def post(self):
        """Достопримечательности провинции и города: [[id, name], ...]"""
        data = json_payload()
        try:
            rows = service.list_attractions(data.get('province'), data.get('city'))
        except DataAccessError:
            return {'data': []}, 500
        return {'data': rows}


@ns.route('/add-attraction')
class AddAttraction(Resource):

    @ns.expect(attraction_model)
    @ns.response(200, 'OK')
    @ns.response(400, 'Неправильный запрос')
    @ns.response(409, 'Координаты заняты другой локацией')
    @ns.response(500, 'Ошибка БД')
    def post(self):
        """Добавить достопримечательность (локация и координаты создаются при необходимости)"""
        data = json_payload()
        lat = parse_number(data.get('lat'))
        long = parse_number(data.get('long'))

        missing = [key for key in ('name', 'province', 'city') if not data.get(key)]
        if lat is None:
            missing.append('lat')
        if long is None:
            missing.append('long')
        if missing:
            return {'data': False, 'message': f"Не заданы поля: {', '.join(missing)}"}, 400

        try:
            inserted = service.add_attraction(
                data['name'], data.get('description'), data.get('open'), data.get('close'),
                lat, long, data.get('category'), data['province'], data['city']
            )
        except LocationConflictError as e:
            return {'data': False, 'message': str(e)}, 409
        except DataAccessError:
            return {'data': False}, 500
        return {'data': inserted}


@ns.route('/count-attractions')
class CountAttractions(Resource):

    @ns.expect(location_model)
    @ns.response(200, 'OK')
    @ns.response(500, 'Ошибка БД')
    def post(self):
        """Число достопримечательностей в городе"""
        data = json_payload()
        try:
            count = service.count_attractions(data.get('province'), data.get('city'))
        except DataAccessError:
            return {'success': False, 'count': -1}, 500
        return {'success': True, 'count': count}


@ns.route('/count-attractions-having')
class CountAttractionsHaving(Resource):

    @ns.expect(having_model)
    @ns.response(200, 'OK')
    @ns.response(400, 'Неправильный запрос')
    @ns.response(500, 'Ошибка БД')
    def post(self):
        """Города, где достопримечательностей больше minCount"""
        data = json_payload()
        min_count = parse_number(data.get('minCount', 0), int)
        if min_count is None:
            return {'success': False, 'message': "minCount должен быть целым числом"}, 400
        try:
            rows = service.cities_with_min_attractions(
                min_count, data.get('province'), data.get('city')
            )
        except DataAccessError:
            return {'success': False, 'data': []}, 500
        return {'success': True, 'data': rows}


@ns.route('/avg-attractions-per-province')
class AverageAttractionsPerProvince(Resource):

    @ns.response(200, 'OK')
    @ns.response(500, 'Ошибка БД')
    def get(self):
        """Среднее число достопримечательностей на город по провинциям"""
        try:
            rows = service.average_attractions_per_province()
        except DataAccessError:
            return {'success': False, 'data': []}, 500
        return {'success': True, 'data': rows}


@ns.route('/update-attraction')
class UpdateAttraction(Resource):

    @ns.expect(update_model)
    @ns.response(200, 'OK')
    @ns.response(400, 'Неправильный запрос')
    @ns.response(404, 'Не найдено')
    @ns.response(409, 'Координаты заняты другой локацией')
    @ns.response(500, 'Ошибка БД')
    def post(self):
        """Изменить поля достопримечательности"""
        data = json_payload()
        attraction_id = parse_number(data.get('id'), int)
        if attraction_id is None:
            return {'success': False, 'message': "Не задан id"}, 400

        coordinates = {}
        for key, field in (('newlat', 'latitude'), ('newlong', 'longitude')):
            if data.get(key) not in (None, ''):
                value = parse_number(data[key])
                if value is None:
                    return {'success': False, 'message': f"{key} должно быть числом"}, 400
                coordinates[field] = value

        try:
            updated = service.update_attraction(
                attraction_id,
                name=data.get('newname') or None,
                description=data.get('newdescription') or None,
                opening_hour=data.get('newopen') or None,
                closing_hour=data.get('newclose') or None,
                category=data.get('newcategory') or None,
                **coordinates
            )
        except LocationConflictError as e:
            return {'success': False, 'message': str(e)}, 409
        except DataAccessError:
            return {'success': False}, 500

        if not updated:
            return {'success': False}, 404
        return {'success': True}


@ns.route('/delete-attraction')
class DeleteAttraction(Resource):

    @ns.expect(delete_model)
    @ns.response(200, 'OK')
    @ns.response(400, 'Неправильный запрос')
    @ns.response(404, 'Не найдено')
    @ns.response(500, 'Ошибка БД')
    def delete(self):
        """Удалить достопримечательность вместе с её впечатлениями"""
        attraction_id = parse_number(json_payload().get('attractionID'), int)
        if attraction_id is None:
            return {'success': False, 'message': "Не задан attractionID"}, 400
        try:
            deleted = service.delete_attraction(attraction_id)
        except DataAccessError:
            return {'success': False}, 500

        if not deleted:
            return {'success': False}, 404
        return {'success': True}
