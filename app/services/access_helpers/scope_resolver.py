# /app/services/access_helpers/scope_resolver.py

"""
The scope resolver: decides whether a principal's relationship to a specific
record lets it perform an action on that record.

The whole ownership matrix lives here, as one rule per role, each rule taking
the resource kind as a parameter:

    ADMIN    always in scope.
    TEACHER  the teacher has a schedule entry for the student's class. For
             modifying or deleting an existing grade the teacher must instead
             be the grade's recorded teacher; teaching the class is not enough.
    STUDENT  the referenced student record belongs to the principal's user.
    PARENT   the referenced student is one of the parent's linked children.

A resolver is built per request on top of that request's DatabaseService.
Every fact is looked up fresh on each call and nothing is cached, because the
relationships behind the facts (schedules, links, grade authorship) change.

Existence is not this module's concern: callers fetch the target first and
raise `NotFound` before asking for a scope decision.
"""

import logging
from typing import Callable, Dict, Iterable, Optional, Set

from app.core.errors import Forbidden
from app.core.principal import Principal, Role
from .resources import Action, ClassRef, GradeRef, OwnershipFact, ResourceRef

logger = logging.getLogger(__name__)

Rule = Callable[[Principal, ResourceRef, Action], OwnershipFact]


class ScopeResolver:
    def __init__(self, lookups):
        """
        Args:
            lookups: The ownership collaborator, normally the request's
                DatabaseService. It must provide `get_teacher_by_user_id`,
                `get_student_by_id`, `get_student_by_user_id`,
                `teacher_has_schedule_for_class`, `get_class_ids_for_teacher`,
                `get_student_class_map` and `get_linked_student_ids`.
        """
        self.lookups = lookups
        self._rules: Dict[Role, Rule] = {
            Role.ADMIN: self._admin_rule,
            Role.TEACHER: self._teacher_rule,
            Role.STUDENT: self._student_rule,
            Role.PARENT: self._parent_rule,
        }
        self._filters: Dict[Role, Callable[[Principal, Set[int]], Set[int]]] = {
            Role.ADMIN: lambda principal, candidates: set(candidates),
            Role.TEACHER: self._teacher_filter,
            Role.STUDENT: self._student_filter,
            Role.PARENT: self._parent_filter,
        }

    # --- Public API ---

    def explain(self, principal: Principal, resource: ResourceRef, action: Action = Action.VIEW) -> OwnershipFact:
        fact = self._rules[principal.role](principal, resource, action)
        if not fact.allowed:
            logger.debug(
                "Scope denied: user=%s role=%s action=%s resource=%r reason=%s",
                principal.id, principal.role.value, action.value, resource, fact.reason,
            )
        return fact

    def in_scope(self, principal: Principal, resource: ResourceRef, action: Action = Action.VIEW) -> bool:
        return self.explain(principal, resource, action).allowed

    def ensure_in_scope(self, principal: Principal, resource: ResourceRef, action: Action = Action.VIEW) -> None:
        if not self.explain(principal, resource, action).allowed:
            raise Forbidden()

    def filter_ids(self, principal: Principal, candidate_ids: Iterable[int]) -> Set[int]:
        """Narrows a set of student ids to the ones the principal may view."""
        candidates = set(candidate_ids)
        if not candidates:
            return set()
        return self._filters[principal.role](principal, candidates)

    # --- Per-Role Rules ---

    def _admin_rule(self, principal: Principal, resource: ResourceRef, action: Action) -> OwnershipFact:
        return OwnershipFact(True, "admin")

    def _teacher_rule(self, principal: Principal, resource: ResourceRef, action: Action) -> OwnershipFact:
        teacher = self.lookups.get_teacher_by_user_id(principal.id)
        if teacher is None:
            return OwnershipFact(False, "principal has no teacher profile")

        if isinstance(resource, GradeRef) and action is Action.MODIFY:
            if resource.teacher_id == teacher.id:
                return OwnershipFact(True, "teacher is the grade's recorded teacher")
            return OwnershipFact(False, "teacher is not the grade's recorded teacher")

        class_id = self._class_of(resource)
        if class_id is None:
            return OwnershipFact(False, "student record not found")
        if self.lookups.teacher_has_schedule_for_class(teacher.id, class_id):
            return OwnershipFact(True, f"teacher teaches class {class_id}")
        return OwnershipFact(False, f"teacher has no schedule entry for class {class_id}")

    def _student_rule(self, principal: Principal, resource: ResourceRef, action: Action) -> OwnershipFact:
        if isinstance(resource, ClassRef):
            own = self.lookups.get_student_by_user_id(principal.id)
            if own is not None and own.class_id == resource.id:
                return OwnershipFact(True, "student belongs to the class")
            return OwnershipFact(False, "student does not belong to the class")

        student = self.lookups.get_student_by_id(resource.student_id)
        if student is not None and student.user_id == principal.id:
            return OwnershipFact(True, "record belongs to the student")
        return OwnershipFact(False, "record belongs to another student")

    def _parent_rule(self, principal: Principal, resource: ResourceRef, action: Action) -> OwnershipFact:
        linked = self.lookups.get_linked_student_ids(principal.id)
        if isinstance(resource, ClassRef):
            class_map = self.lookups.get_student_class_map(linked)
            if resource.id in class_map.values():
                return OwnershipFact(True, "a linked child belongs to the class")
            return OwnershipFact(False, "no linked child belongs to the class")

        if resource.student_id in linked:
            return OwnershipFact(True, "parent is linked to the student")
        return OwnershipFact(False, "parent is not linked to the student")

    # --- Per-Role Filters ---

    def _teacher_filter(self, principal: Principal, candidates: Set[int]) -> Set[int]:
        teacher = self.lookups.get_teacher_by_user_id(principal.id)
        if teacher is None:
            return set()
        class_ids = self.lookups.get_class_ids_for_teacher(teacher.id)
        class_map = self.lookups.get_student_class_map(candidates)
        return {student_id for student_id, class_id in class_map.items() if class_id in class_ids}

    def _student_filter(self, principal: Principal, candidates: Set[int]) -> Set[int]:
        own = self.lookups.get_student_by_user_id(principal.id)
        if own is None:
            return set()
        return candidates & {own.id}

    def _parent_filter(self, principal: Principal, candidates: Set[int]) -> Set[int]:
        return candidates & set(self.lookups.get_linked_student_ids(principal.id))

    # --- Helpers ---

    def _class_of(self, resource: ResourceRef) -> Optional[int]:
        if isinstance(resource, ClassRef):
            return resource.id
        student = self.lookups.get_student_by_id(resource.student_id)
        return student.class_id if student is not None else None
