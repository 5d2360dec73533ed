from flask import Response, current_app
from flask_restx import Namespace, Resource

from tourism_app.celery.celery_app import celery
from tourism_app.services.attractions import all_attractions
from tourism_app.services.exceptions import DataAccessError
from tourism_app.services.load_data import load_seed_data
from tourism_app.services.pool import ping_database
from tourism_app.utils.logger import logger

ns = Namespace('service', description='Состояние БД и начальные данные', path='/')


@ns.route('/check-db-connection')
class CheckDbConnection(Resource):

    @ns.response(200, 'connected / unable to connect')
    def get(self):
        """Проверка подключения к БД (text/plain)"""
        text = 'connected' if ping_database() else 'unable to connect'
        return Response(text, mimetype='text/plain')


@ns.route('/initiate-table')
class InitiateTable(Resource):

    @ns.response(200, 'Таблицы перезаполнены')
    @ns.response(422, 'Ошибка формата CSV')
    @ns.response(500, 'Ошибка БД или файлы не найдены')
    def post(self):
        """Перезаполнить таблицы начальными данными и вернуть достопримечательности"""
        seed_dir = current_app.config['SEED_DATA_DIR']
        try:
            counts = load_seed_data(seed_dir)
            rows = all_attractions()
        except FileNotFoundError as e:
            return {'success': False, 'message': str(e)}, 500
        except (ValueError, KeyError) as e:
            return {'success': False, 'message': f"Ошибка обработки CSV: {e}"}, 422
        except DataAccessError:
            return {'success': False}, 500
        return {'success': True, 'data': rows, 'counts': counts}


@ns.route('/initiate-table/async')
class InitiateTableAsync(Resource):

    @ns.response(202, 'Задача принята')
    def post(self):
        """Фоновое перезаполнение таблиц (возвращает task_id)"""
        from tourism_app.celery.tasks import repopulate_tables_task

        task = repopulate_tables_task.apply_async(args=[current_app.config['SEED_DATA_DIR']])
        logger.info(f"Поставлена задача перезаполнения таблиц: {task.id}")
        return {'task_id': task.id}, 202


@ns.route('/status/<string:task_id>')
class TaskStatus(Resource):

    @ns.response(200, 'OK')
    @ns.response(202, 'В процессе')
    @ns.response(500, 'Ошибка выполнения')
    @ns.response(503, 'Хранилище результатов не настроено')
    def get(self, task_id):
        """Статус фоновой задачи по task_id"""
        if not celery.conf.result_backend:
            return {'state': 'UNKNOWN', 'message': "Хранилище результатов Celery не настроено"}, 503
        res = celery.AsyncResult(task_id)
        if res.state in ('PENDING', 'STARTED'):
            return {'state': res.state}, 202
        if res.state == 'SUCCESS':
            return {'state': res.state, 'result': res.result}, 200
        if res.state in ('FAILURE', 'RETRY'):
            return {'state': res.state, 'error': str(res.result or res.traceback)}, 500
        return {'state': res.state}, 200
