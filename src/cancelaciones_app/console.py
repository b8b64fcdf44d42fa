from __future__ import annotations

import logging
from getpass import getpass

from cancelaciones_sdk.models import ShiftPeriod

from cancelaciones_app.app.bootstrap import AppBootstrap
from cancelaciones_app.app.state import Route
from cancelaciones_app.domain.dates import parse_input_date
from cancelaciones_app.services.cashier_records_service import CashierRecordsService
from cancelaciones_app.services.catalog_service import CatalogService
from cancelaciones_app.services.errors import ServiceError
from cancelaciones_app.services.export_service import ExportService
from cancelaciones_app.services.supervisor_records_service import SupervisorRecordsService
from cancelaciones_app.ui.cashier.entry_form import EntryFormView
from cancelaciones_app.ui.cashier.recent_records_view import RecentRecordsView
from cancelaciones_app.ui.loading_view import LoadingView
from cancelaciones_app.ui.login_view import LoginView
from cancelaciones_app.ui.shared.error_presenter import build_error_payload, print_error_banner
from cancelaciones_app.ui.supervisor.records_view import SupervisorRecordsView
from cancelaciones_app.ui.table_printer import print_table

logger = logging.getLogger(__name__)

RECENT_COLUMNS = [("id", "ID"), ("fecha", "Fecha"), ("turno", "Turno"), ("total_cancelled", "Canceladas")]
DETAIL_COLUMNS = [("sabor", "Sabor"), ("motivo", "Motivo"), ("cantidad", "Cantidad")]
SUPERVISOR_COLUMNS = [
    ("id", "ID"),
    ("fecha", "Fecha"),
    ("turno", "Turno"),
    ("sucursal", "Sucursal"),
    ("cajero", "Cajero"),
    ("total_cancelled", "Total Canceladas"),
    ("total_sent", "Enviadas a central"),
    ("discrepancia", "Discrepancia"),
]


class CancelacionesConsole:
    def __init__(self, bootstrap: AppBootstrap) -> None:
        self.bootstrap = bootstrap
        session = bootstrap.session
        self.cashier_service = CashierRecordsService(session)
        self.catalog_service = CatalogService(session)
        self.supervisor_service = SupervisorRecordsService(session)
        self.export_service = ExportService(session, bootstrap.app_config)

    def run(self) -> int:
        print(LoadingView().render()["message"])
        self.bootstrap.start()
        notice = self._take_notice()
        if notice:
            print(f"[aviso] {notice}")
        try:
            while True:
                route = self.bootstrap.state.route
                if route is Route.LOADING:
                    print(LoadingView().render()["message"])
                    return 1
                try:
                    if route is Route.LOGIN:
                        if not self._login_screen():
                            return 0
                    elif route is Route.CASHIER:
                        self._cashier_screen()
                    elif route is Route.SUPERVISOR:
                        self._supervisor_screen()
                except ServiceError as exc:
                    logger.warning("console_service_error", extra={"code": exc.code, "trace_id": exc.trace_id})
                    print_error_banner(build_error_payload(exc))
        finally:
            self.bootstrap.teardown()

    def _login_screen(self) -> bool:
        view = LoginView(self.bootstrap)
        header = view.render()
        print(f"\n{header['title']}\n{header['subtitle']}")
        notice = self._take_notice()
        if notice:
            print(notice)
        email = input("Usuario (vacío para salir): ").strip()
        if not email:
            return False
        password = getpass("Contraseña: ")
        if not view.submit(email, password):
            # the failed attempt is reported here, not again on the next pass
            self._take_notice()
            print(view.error_message)
        return True

    def _take_notice(self) -> str | None:
        notice = self.bootstrap.state.error_message
        self.bootstrap.state.error_message = None
        return notice

    def _cashier_screen(self) -> None:
        context = self.bootstrap.context
        recent = RecentRecordsView(self.cashier_service, context)
        form = EntryFormView(self.cashier_service, self.catalog_service, context, recent=recent)
        form.load()
        if form.message:
            print(form.message)
        while self.bootstrap.state.route is Route.CASHIER:
            self._print_form(form)
            print("1. Nombre del cajero  2. Fecha  3. Turno  4. Agregar pizza  5. Editar pizza  6. Quitar pizza")
            print("7. Guardar  8. Registros recientes  9. Salir")
            option = input("Selecciona una opción: ").strip()
            if option == "1":
                form.set_cashier_name(input("Nombre del cajero: "))
            elif option == "2":
                self._prompt_form_date(form)
            elif option == "3":
                self._prompt_shift(form)
            elif option == "4":
                form.add_item()
                self._edit_item(form, len(form.draft.items) - 1)
            elif option == "5":
                index = self._prompt_index(len(form.draft.items))
                if index is not None:
                    self._edit_item(form, index)
            elif option == "6":
                index = self._prompt_index(len(form.draft.items))
                if index is not None:
                    form.remove_item(index)
            elif option == "7":
                form.submit()
                print(form.message)
            elif option == "8":
                self._recent_loop(recent)
            elif option == "9":
                self.bootstrap.logout()
                print("Sesión cerrada")
            else:
                print("Opción no válida.")

    def _print_form(self, form: EntryFormView) -> None:
        payload = form.render()
        print("\nPizza Río - Registro de Cancelaciones")
        print(f"Sucursal: {payload['branch']}")
        print(f"Cajero: {payload['cashier_name'] or '—'} | Fecha: {payload['fecha']} | Turno: {payload['turno']}")
        rows = [{"n": idx + 1, **item} for idx, item in enumerate(payload["items"])]
        print_table("Pizzas canceladas", rows, [("n", "#")] + DETAIL_COLUMNS)

    def _prompt_form_date(self, form: EntryFormView) -> None:
        raw = input("Fecha (dd-mm-aaaa): ")
        try:
            form.set_date(parse_input_date(raw))
        except ValueError as exc:
            print(exc)

    def _prompt_shift(self, form: EntryFormView) -> None:
        raw = input("Turno (AM/PM): ").strip().upper()
        if raw not in {shift.value for shift in ShiftPeriod}:
            print("Turno inválido.")
            return
        form.set_turno(raw)

    def _edit_item(self, form: EntryFormView, index: int) -> None:
        flavors = form.catalogs.flavors
        reasons = form.catalogs.reasons
        print_table("Sabores", [{"n": i + 1, "label": f.label} for i, f in enumerate(flavors)], [("n", "#"), ("label", "Sabor")])
        flavor_index = self._prompt_index(len(flavors))
        print_table("Motivos", [{"n": i + 1, "label": r.label} for i, r in enumerate(reasons)], [("n", "#"), ("label", "Motivo")])
        reason_index = self._prompt_index(len(reasons))
        form.update_item(index, "flavor_id", flavors[flavor_index].id if flavor_index is not None else None)
        form.update_item(index, "reason_id", reasons[reason_index].id if reason_index is not None else None)
        form.update_item(index, "cantidad", input("Cantidad: ").strip())

    def _recent_loop(self, recent: RecentRecordsView) -> None:
        while True:
            payload = recent.render()
            self._print_listing(f"Mis registros recientes ({payload['page']})", payload, RECENT_COLUMNS)
            if payload["detail"] or recent.expanded_id is not None:
                print_table(f"Detalle del registro {recent.expanded_id}", payload["detail"], DETAIL_COLUMNS)
            print("n=siguiente, p=anterior, d=detalle, b=volver")
            command = input("cmd: ").strip().lower()
            if command == "n":
                if not recent.next_page():
                    print("No hay más registros.")
            elif command == "p":
                recent.prev_page()
            elif command == "d":
                recent.toggle(input("ID del registro: ").strip())
            elif command == "b":
                return
            else:
                print("Opción no válida.")

    def _supervisor_screen(self) -> None:
        view = SupervisorRecordsView(
            self.supervisor_service,
            self.catalog_service,
            self.export_service,
            self.bootstrap.context,
        )
        view.load()
        while self.bootstrap.state.route is Route.SUPERVISOR:
            self._print_supervisor(view)
            print("1. Sucursal  2. Fecha  3. Aplicar filtros  4. Limpiar filtros  5. Siguiente  6. Anterior")
            print("7. Ver/ocultar detalle  8. Validar  9. Exportar resumen  10. Exportar detalle  0. Salir")
            option = input("Selecciona una opción: ").strip()
            if option == "1":
                self._prompt_branch(view)
            elif option == "2":
                raw = input("Fecha (dd-mm-aaaa, vacío = todas): ")
                try:
                    view.set_date_filter(parse_input_date(raw))
                except ValueError as exc:
                    print(exc)
            elif option == "3":
                view.apply_filters()
            elif option == "4":
                view.clear_filters()
            elif option == "5":
                if not view.next_page():
                    print("No hay más registros.")
            elif option == "6":
                view.prev_page()
            elif option == "7":
                view.toggle_detail(input("ID del registro: ").strip())
            elif option == "8":
                self._validate(view)
            elif option == "9":
                view.export_summary()
                print(view.export_message)
            elif option == "10":
                view.export_detail()
                print(view.export_message)
            elif option == "0":
                if input("¿Seguro que deseas salir? (s/n): ").strip().lower() == "s":
                    self.bootstrap.logout()
                    print("Sesión cerrada")
            else:
                print("Opción no válida.")

    def _print_supervisor(self, view: SupervisorRecordsView) -> None:
        payload = view.render()
        totals = payload["totals"]
        print("\nPizza Río - Supervisor")
        print(f"Filtros: sucursal={payload['filters']['sucursal']} fecha={payload['filters']['fecha']}")
        print(
            f"Total Registros: {totals['record_count']} | Pizzas Canceladas: {totals['total_cancelled']} "
            f"| Enviadas a Central: {totals['total_sent']}"
        )
        self._print_listing(f"Registros de Cancelaciones ({payload['page']})", payload, SUPERVISOR_COLUMNS)
        detail = payload["detail"]
        if detail["open"]:
            print(f"\nFecha: {detail['fecha']} | Turno: {detail['turno']} | Sucursal: {detail['sucursal']} | Cajero: {detail['cajero']}")
            print_table("Detalle", detail["items"], DETAIL_COLUMNS)
            print(f"Total pizzas reportadas: {detail['total_reported']}")
            if detail["confirmation"]:
                print(detail["confirmation"])
            if detail["message"]:
                print(detail["message"])

    def _prompt_branch(self, view: SupervisorRecordsView) -> None:
        rows = [{"n": 0, "name": "Todas"}] + [{"n": i + 1, "name": b.name} for i, b in enumerate(view.branches)]
        print_table("Sucursales", rows, [("n", "#"), ("name", "Sucursal")])
        raw = input("Sucursal #: ").strip()
        if raw == "0":
            view.set_branch_filter(None)
            return
        if raw.isdigit() and 1 <= int(raw) <= len(view.branches):
            view.set_branch_filter(view.branches[int(raw) - 1].id)
            return
        print("Sucursal inválida.")

    def _validate(self, view: SupervisorRecordsView) -> None:
        if not view.detail.is_open:
            print("Seleccione un registro primero.")
            return
        if not view.detail.can_validate:
            print(f"Validación realizada: llegaron {view.detail.record.total_sent} pizzas.")
            return
        view.validate_selected(input("Pizzas que llegaron a central: ").strip())
        print(view.detail.message)

    @staticmethod
    def _print_listing(title: str, payload: dict, columns: list[tuple[str, str]]) -> None:
        if payload["rows"]:
            print_table(title, payload["rows"], columns)
        else:
            print(f"\n{title}")
        if payload["notice"]:
            print(payload["notice"])

    @staticmethod
    def _prompt_index(size: int) -> int | None:
        raw = input("Número: ").strip()
        if raw.isdigit() and 1 <= int(raw) <= size:
            return int(raw) - 1
        print("Selección inválida.")
        return None
