from flask_restx import Namespace, Resource, fields

from tourism_app.routes import json_payload, parse_number
from tourism_app.services import experiences as service
from tourism_app.services.exceptions import (
    DataAccessError, InvalidColumnError, InvalidComparisonError
)

ns = Namespace('experiences', description='Впечатления и посетители', path='/')

projection_model = ns.model('ExperienceProjection', {
    'id':       fields.Integer(required=True, description="ID достопримечательности"),
    'toSelect': fields.List(
        fields.String,
        required=True,
        description=f"Атрибуты: {', '.join(service.EXPERIENCE_COLUMNS)}"
    ),
})

budget_model = ns.model('BudgetFilter', {
    'price':      fields.Float(required=True, description="Цена"),
    'comparison': fields.String(required=True, description="<, <=, =, >=, >"),
})

completionist_model = ns.model('CompletionistQuery', {
    'attractionID': fields.Integer(required=True, description="ID достопримечательности"),
})


@ns.route('/project-tables')
class ProjectExperiences(Resource):

    @ns.expect(projection_model)
    @ns.response(200, 'OK')
    @ns.response(400, 'Недопустимые атрибуты')
    @ns.response(500, 'Ошибка БД')
    def post(self):
        """Выбранные атрибуты впечатлений достопримечательности"""
        data = json_payload()
        # клиентский скрипт присылает attractionID/selectedBoxes
        attraction_id = data.get('id', data.get('attractionID'))
        to_select = data.get('toSelect', data.get('selectedBoxes'))

        if not isinstance(to_select, list):
            return {'projectedExperiences': [], 'message': "toSelect должен быть списком"}, 400
        try:
            rows = service.project_experiences(attraction_id, to_select)
        except InvalidColumnError as e:
            return {'projectedExperiences': [], 'message': str(e)}, 400
        except DataAccessError:
            return {'projectedExperiences': []}, 500
        return {'projectedExperiences': rows}


@ns.route('/filter-experiences')
class FilterExperiences(Resource):

    @ns.expect(budget_model)
    @ns.response(200, 'OK')
    @ns.response(400, 'Неправильный запрос')
    @ns.response(500, 'Ошибка БД')
    def post(self):
        """Впечатления, цена которых удовлетворяет сравнению"""
        data = json_payload()
        price = parse_number(data.get('price'))
        if price is None:
            return {'filteredExperiences': [], 'message': "price должно быть числом"}, 400
        try:
            rows = service.filter_experiences_by_price(price, data.get('comparison'))
        except InvalidComparisonError as e:
            return {'filteredExperiences': [], 'message': str(e)}, 400
        except DataAccessError:
            return {'filteredExperiences': []}, 500
        return {'filteredExperiences': rows}


@ns.route('/find-completionists')
class FindCompletionists(Resource):

    @ns.expect(completionist_model)
    @ns.response(200, 'OK')
    @ns.response(500, 'Ошибка БД')
    def post(self):
        """Пользователи, посетившие все впечатления достопримечательности"""
        try:
            rows = service.find_completionists(json_payload().get('attractionID'))
        except DataAccessError:
            return {'data': []}, 500
        return {'data': rows}
