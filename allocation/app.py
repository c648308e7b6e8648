# allocation/app.py
from wsgiref.simple_server import make_server
import json
import logging
import re

from allocation.config import get_settings
from allocation.database.database import SessionLocal
from allocation.repositories.sqlalchemy import (
    SqlalchemyUserRepository, SqlalchemyProjectRepository, SqlalchemyRegistrationRepository
)
from allocation.services.user_service import UserService
from allocation.services.project_service import ProjectService
from allocation.services.allocation_service import AllocationService
from allocation.services.exceptions import *

logger = logging.getLogger(__name__)

# --------------------------------------------------------------------------
## 요청 처리 유틸리티 함수
# --------------------------------------------------------------------------

# JSON 본문의 camelCase 키 -> 서비스 인자 이름
USER_FIELD_MAP = {"name": "name", "username": "username", "password": "password", "typeId": "type_id"}
PROJECT_FIELD_MAP = {"title": "title", "description": "description", "staffId": "staff_id", "available": "available"}

def get_request_data(environ):
    try:
        content_length = int(environ.get("CONTENT_LENGTH") or 0)
        data = json.loads(environ["wsgi.input"].read(content_length)) if content_length > 0 else {}
    except (ValueError, json.JSONDecodeError):
        raise ValueError("Invalid or missing JSON body.")
    if not isinstance(data, dict):
        raise ValueError("JSON body must be an object.")
    return data

def require_fields(data, *names):
    missing = [name for name in names if data.get(name) is None]
    if missing:
        raise ValueError(f"Missing required field(s): {', '.join(missing)}.")
    return [data[name] for name in names]

def require_int(value, name):
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Field '{name}' must be an integer.")

def map_fields(data, field_map, int_fields=()):
    fields = {}
    for key, value in data.items():
        if key in field_map:
            fields[field_map[key]] = require_int(value, key) if key in int_fields else value
    return fields

def handle_exception(e):
    error_map = {
        UserNotFoundError: "404 Not Found",
        ProjectNotFoundError: "404 Not Found",
        AuthenticationError: "401 Unauthorized",
        ValueError: "400 Bad Request",
        UserCreationError: "400 Bad Request",
        AlreadyAssignedError: "400 Bad Request",
        AlreadyInterestedError: "400 Bad Request",
        NotAStudentError: "400 Bad Request",
        NotAStaffError: "400 Bad Request",
    }
    status = error_map.get(type(e), "500 Internal Server Error")
    if status.startswith("500"):
        logger.error("Request failed: %s", e, exc_info=e)
    return status, json.dumps({"error": str(e)})

# --------------------------------------------------------------------------
## 핸들러 함수
# --------------------------------------------------------------------------

# --- User ---
def create_user_handler(environ, *args):
    data = get_request_data(environ)
    name, username, password, type_id = require_fields(data, "name", "username", "password", "typeId")
    user = environ['services']['user'].create_user(name, username, password, require_int(type_id, "typeId"))
    return '201 Created', json.dumps(user)

def get_user_handler(environ, user_id):
    return '200 OK', json.dumps(environ['services']['user'].get_user(int(user_id)))

def get_user_by_username_handler(environ, username):
    return '200 OK', json.dumps(environ['services']['user'].get_user_by_username(username))

def get_user_id_by_username_handler(environ, username):
    user_id = environ['services']['user'].get_user_id_by_username(username)
    return '200 OK', json.dumps({"id": user_id})

def list_users_handler(environ, *args):
    return '200 OK', json.dumps({"users": environ['services']['user'].list_users()})

def update_user_handler(environ, user_id):
    fields = map_fields(get_request_data(environ), USER_FIELD_MAP, int_fields=("typeId",))
    user = environ['services']['user'].update_user(int(user_id), **fields)
    return '200 OK', json.dumps(user)

def update_password_handler(environ, user_id):
    (password,) = require_fields(get_request_data(environ), "password")
    environ['services']['user'].update_password(int(user_id), password)
    return '204 No Content', ''

def delete_user_handler(environ, user_id):
    environ['services']['user'].delete_user(int(user_id))
    return '204 No Content', ''

def login_handler(environ, *args):
    data = get_request_data(environ)
    username, password, type_id = require_fields(data, "username", "password", "typeId")
    user = environ['services']['user'].login(username, password, require_int(type_id, "typeId"))
    return '200 OK', json.dumps(user)

def verify_password_handler(environ, *args):
    user_id, password = require_fields(get_request_data(environ), "id", "password")
    if environ['services']['user'].verify_password(require_int(user_id, "id"), password):
        return '200 OK', json.dumps({"message": "success"})
    return '401 Unauthorized', json.dumps({"error": "Password error"})

# --- Project ---
def create_project_handler(environ, *args):
    data = get_request_data(environ)
    title, staff_id = require_fields(data, "title", "staffId")
    project = environ['services']['project'].create_project(
        title, data.get("description"), require_int(staff_id, "staffId"),
        require_int(data.get("available", 1), "available"),
    )
    return '201 Created', json.dumps(project)

def get_project_handler(environ, project_id):
    return '200 OK', json.dumps(environ['services']['project'].get_project(int(project_id)))

def update_project_handler(environ, project_id):
    fields = map_fields(get_request_data(environ), PROJECT_FIELD_MAP, int_fields=("staffId", "available"))
    project = environ['services']['project'].update_project(int(project_id), **fields)
    return '200 OK', json.dumps(project)

def delete_project_handler(environ, project_id):
    environ['services']['project'].delete_project(int(project_id))
    return '204 No Content', ''

def list_projects_handler(environ, *args):
    return '200 OK', json.dumps({"projects": environ['services']['project'].list_projects()})

def list_staff_projects_handler(environ, staff_id):
    projects = environ['services']['project'].list_projects_for_staff(int(staff_id))
    return '200 OK', json.dumps({"projects": projects})

def make_project_unavailable_handler(environ, project_id):
    environ['services']['project'].make_unavailable(int(project_id))
    return '204 No Content', ''

# --- Registration ---
def express_interest_handler(environ, *args):
    project_id, student_id = require_fields(get_request_data(environ), "projectId", "studentId")
    registration_id = environ['services']['allocation'].express_interest(
        require_int(project_id, "projectId"), require_int(student_id, "studentId")
    )
    return '201 Created', json.dumps({"registrationId": registration_id})

def list_student_registrations_handler(environ, student_id):
    registrations = environ['services']['allocation'].list_for_student(int(student_id))
    return '200 OK', json.dumps({"registrations": registrations})

def list_staff_registrations_handler(environ, staff_id):
    registrations = environ['services']['allocation'].list_for_staff(int(staff_id))
    return '200 OK', json.dumps({"registrations": registrations})

def approve_registration_handler(environ, registration_id):
    if environ['services']['allocation'].approve(int(registration_id)):
        return '200 OK', json.dumps({"message": "Registration approved successfully"})
    return '400 Bad Request', json.dumps({"error": "Failed to approve registration"})

def is_assigned_handler(environ, student_id):
    assigned = environ['services']['allocation'].is_assigned(int(student_id))
    return '200 OK', json.dumps({"assigned": assigned})

ROUTES = [
    ('POST', r'^/user$', create_user_handler),
    ('GET', r'^/user/all$', list_users_handler),
    ('POST', r'^/user/login$', login_handler),
    ('POST', r'^/user/verify-password$', verify_password_handler),
    ('GET', r'^/user/id/([0-9]+)$', get_user_handler),
    ('GET', r'^/user/username/([^/]+)/id$', get_user_id_by_username_handler),
    ('GET', r'^/user/username/([^/]+)$', get_user_by_username_handler),
    ('PUT', r'^/user/([0-9]+)$', update_user_handler),
    ('PUT', r'^/user/([0-9]+)/password$', update_password_handler),
    ('DELETE', r'^/user/([0-9]+)$', delete_user_handler),
    ('POST', r'^/project$', create_project_handler),
    ('GET', r'^/project/all$', list_projects_handler),
    ('GET', r'^/project/staff/([0-9]+)$', list_staff_projects_handler),
    ('PUT', r'^/project/make-unavailable/([0-9]+)$', make_project_unavailable_handler),
    ('GET', r'^/project/([0-9]+)$', get_project_handler),
    ('PUT', r'^/project/([0-9]+)$', update_project_handler),
    ('DELETE', r'^/project/([0-9]+)$', delete_project_handler),
    ('POST', r'^/registration$', express_interest_handler),
    ('GET', r'^/registration/student/([0-9]+)$', list_student_registrations_handler),
    ('GET', r'^/registration/student/([0-9]+)/assigned$', is_assigned_handler),
    ('GET', r'^/registration/staff/([0-9]+)$', list_staff_registrations_handler),
    ('PUT', r'^/registration/assign/([0-9]+)$', approve_registration_handler),
]

# --------------------------------------------------------------------------
## WSGI 애플리케이션 (의존성 주입 및 라우팅)
# --------------------------------------------------------------------------

def create_application(session_factory=SessionLocal):
    """요청마다 새 세션과 리포지토리/서비스를 만들어 처리하는 WSGI 애플리케이션을 생성합니다."""

    def application(environ, start_response):
        db_session = session_factory()
        try:
            # 1. 의존성 생성 (Repositories -> Services)
            user_repo = SqlalchemyUserRepository(db_session)
            project_repo = SqlalchemyProjectRepository(db_session)
            registration_repo = SqlalchemyRegistrationRepository(db_session)

            # 2. 생성된 서비스 객체들을 environ을 통해 핸들러에 전달
            environ['services'] = {
                'user': UserService(user_repo),
                'project': ProjectService(project_repo, user_repo),
                'allocation': AllocationService(registration_repo, user_repo),
            }

            # 3. 라우팅 및 핸들러 실행
            path = environ.get("PATH_INFO", "")
            method = environ.get("REQUEST_METHOD", "")

            handler, path_args = None, []
            for route_method, pattern, route_handler in ROUTES:
                if method == route_method and (match := re.match(pattern, path)):
                    handler, path_args = route_handler, match.groups()
                    break

            if handler:
                status, response_body = handler(environ, *path_args)
            else:
                status, response_body = '404 Not Found', json.dumps({'error': 'Not Found'})

        except Exception as e:
            status, response_body = handle_exception(e)
        finally:
            db_session.close()

        start_response(status, [("Content-Type", "application/json")])
        return [response_body.encode("utf-8")]

    return application


application = create_application()

# --------------------------------------------------------------------------
## 서버 실행
# --------------------------------------------------------------------------

if __name__ == "__main__":
    from allocation.database.db_init import initialize_db

    settings = get_settings()
    logging.basicConfig(level=settings.log_level,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    initialize_db(seed_sample_data=settings.seed_sample_data)
    try:
        with make_server(settings.host, settings.port, application) as httpd:
            logger.info("Serving project allocation service on port %s...", settings.port)
            httpd.serve_forever()
    except OSError:
        logger.exception("Error starting server")
        raise
