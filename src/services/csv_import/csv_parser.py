"""
CSV Parser for Import System.

Tokenizes raw CSV text into header and row values.
Follows Single Responsibility Principle - only parsing logic.
"""
from __future__ import annotations

from typing import List, Union


class CSVParser:
    """
    Parser CSV riga per riga.

    Stateless parser - tutti i metodi sono statici.
    Le virgolette doppie delimitano i campi che contengono virgole; le doppie
    virgolette interne ("") non vengono trasformate in una virgoletta singola.
    """

    QUOTE = '"'
    SEPARATOR = ','

    @staticmethod
    def decode(file_content: Union[bytes, str]) -> str:
        """
        Decodifica il contenuto del file: UTF-8, altrimenti latin-1
        (che accetta qualsiasi sequenza di byte).

        Args:
            file_content: Contenuto file CSV in bytes (o già testo)

        Returns:
            Testo del file senza BOM
        """
        if isinstance(file_content, str):
            return file_content
        try:
            return file_content.decode('utf-8-sig')  # utf-8-sig rimuove BOM
        except UnicodeDecodeError:
            return file_content.decode('latin-1')

    @staticmethod
    def split_lines(content: str) -> List[str]:
        """Divide il testo in righe scartando quelle vuote"""
        return [line for line in content.split('\n') if line.strip()]

    @staticmethod
    def parse_row(line: str) -> List[str]:
        """
        Divide una riga nei suoi campi.

        Una virgoletta alterna la modalità "dentro un campo quotato" e non viene
        copiata nel valore; la virgola separa i campi solo fuori dalle virgolette.
        Virgolette non bilanciate: il resto della riga finisce in un unico campo.

        Args:
            line: Riga CSV

        Returns:
            Lista dei campi, ognuno senza spazi iniziali/finali
        """
        fields: List[str] = []
        current: List[str] = []
        in_quotes = False

        for char in line:
            if char == CSVParser.QUOTE:
                in_quotes = not in_quotes
            elif char == CSVParser.SEPARATOR and not in_quotes:
                fields.append(''.join(current).strip())
                current = []
            else:
                current.append(char)

        fields.append(''.join(current).strip())
        return fields

    @staticmethod
    def clean_value(value: str) -> str:
        """Rimuove le virgolette residue e gli spazi da un valore"""
        return value.replace(CSVParser.QUOTE, '').strip()

    @staticmethod
    def parse_values(line: str) -> List[str]:
        """Campi di una riga dati, già ripuliti"""
        return [CSVParser.clean_value(value) for value in CSVParser.parse_row(line)]

    @staticmethod
    def parse_headers(line: str) -> List[str]:
        """Headers in minuscolo, senza virgolette"""
        return [CSVParser.clean_value(header).lower() for header in CSVParser.parse_row(line)]
