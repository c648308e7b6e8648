# allocation/services/exceptions.py

# --- General Exceptions ---
class UserNotFoundError(Exception):
    """사용자를 찾을 수 없을 때"""
    pass

class ProjectNotFoundError(Exception):
    """프로젝트를 찾을 수 없을 때"""
    pass

# --- Creation/Validation Exceptions ---
class UserCreationError(Exception):
    """사용자 생성 실패 시 (로그인 이름 중복)"""
    pass

class AlreadyAssignedError(Exception):
    """이미 프로젝트에 배정된 학생이 새로 관심 등록을 하려 할 때"""
    pass

class AlreadyInterestedError(Exception):
    """같은 프로젝트에 이미 등록 행이 있는 학생이 다시 관심 등록을 하려 할 때"""
    pass

class NotAStudentError(Exception):
    """학생 전용 작업을 학생이 아닌 사용자가 요청했을 때"""
    pass

class NotAStaffError(Exception):
    """교직원 전용 작업을 교직원이 아닌 사용자가 요청했을 때"""
    pass

# --- Auth Exceptions ---
class AuthenticationError(Exception):
    """사용자 자격 증명 실패 시"""
    pass

# --- Storage Exceptions ---
class StorageError(Exception):
    """저장소 계층의 모든 실패 (연결, 제약 조건 위반, 타임아웃). 재시도하지 않습니다."""
    pass
