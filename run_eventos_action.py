#!/usr/bin/env python3
import argparse
import json
import logging
import sys

from config import Config
from app.errors import StorageError
from app.models import Evento, generate_unique_id
from app.storage import JsonStore

COLLECTION = "eventos"


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Executa ação sobre o arquivo de eventos sem subir o servidor")
    p.add_argument("--action", choices=["list", "show", "create", "update", "delete"], required=True)
    p.add_argument("--id", help="Id do evento (show, update, delete; opcional em create)")
    p.add_argument("--name", help="Nome do evento")
    p.add_argument("--costo", help="Custo do evento, ex: s/5000")
    p.add_argument("--file", default=Config.DATA_FILE, help="Arquivo JSON de dados")
    return p.parse_args(argv)


def _campos(args) -> dict:
    dados = {}
    if args.name is not None:
        dados["name"] = args.name
    if args.costo is not None:
        dados["costo"] = args.costo
    return dados


def _print(obj):
    print(json.dumps(obj, ensure_ascii=False))


def main(argv=None):
    args = parse_args(argv)
    if args.action in ("show", "update", "delete") and not args.id:
        logging.error("--id é obrigatório para %s", args.action)
        return 2

    try:
        store = JsonStore(args.file)
        if args.action == "list":
            _print(store.collection(COLLECTION))
            return 0

        if args.action == "show":
            evento = store.find(COLLECTION, args.id)
        elif args.action == "create":
            dados = _campos(args)
            if args.id:
                dados["id"] = args.id
            evento = store.append_with_id(
                COLLECTION,
                dados,
                lambda existentes: generate_unique_id(existentes, Config.ID_LENGTH),
                build=lambda d: Evento.from_dict(d).to_dict(),
            )
        elif args.action == "update":
            evento = store.merge_update(COLLECTION, args.id, _campos(args))
        else:
            evento = {"id": args.id} if store.remove_all(COLLECTION, args.id) else None
    except StorageError as e:
        logging.error("Falha no arquivo de dados: %s", e)
        return 3

    if evento is None:
        logging.error("Evento não encontrado: %s", args.id)
        return 4
    _print(evento)
    return 0


if __name__ == '__main__':
    sys.exit(main())
