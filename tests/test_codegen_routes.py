"""Tests for the route handler renderers."""

import pytest

from kalendis_mcp.codegen import (
    NESTJS_FILES,
    generate_express_routes,
    generate_fastify_routes,
    generate_nestjs_module,
    generate_nextjs_routes,
    generate_routes,
)
from kalendis_mcp.errors import InvalidArgument
from kalendis_mcp.loader import load_catalog


class TestGenerateRoutes:
    """Test framework dispatch."""

    def test_unknown_framework(self):
        with pytest.raises(InvalidArgument, match="nextjs, express, fastify, nestjs"):
            generate_routes("graphql")

    def test_missing_framework(self):
        with pytest.raises(InvalidArgument, match="Valid framework is required"):
            generate_routes(None)

    def test_express(self):
        assert generate_routes("express") == generate_express_routes()

    def test_fastify(self):
        assert generate_routes("fastify") == generate_fastify_routes()

    def test_nextjs(self):
        assert generate_routes("nextjs") == generate_nextjs_routes()

    def test_nestjs(self):
        assert generate_routes("nestjs") == generate_nestjs_module()

    def test_types_path_forwarded(self):
        source = generate_routes("express", types_import_path="@/shared/types")
        assert "import type * as Types from '@/shared/types';" in source


class TestExpressRoutes:
    """Test the Express router module."""

    @classmethod
    def setup_class(cls):
        cls.catalog = load_catalog()
        cls.source = generate_express_routes()

    def test_router(self):
        assert self.source.startswith("import { Request, Response, Router } from 'express';\n")
        assert "const router = Router();" in self.source
        assert self.source.rstrip().endswith("export default router;")

    def test_client_from_env(self):
        assert "apiKey: process.env.KALENDIS_API_KEY!" in self.source

    def test_every_operation_once(self):
        for name in self.catalog:
            assert self.source.count(f"kalendisClient.{name}(") == 1, name

    def test_handlers_in_catalog_order(self):
        positions = [self.source.index(f"kalendisClient.{name}(") for name in self.catalog]
        assert positions == sorted(positions)

    def test_route_registration(self):
        assert "router.get('/api/users', async (req: Request, res: Response) => {" in self.source
        assert "router.put('/api/bookings/:id', async (req: Request, res: Response) => {" in self.source

    def test_path_merged_over_body(self):
        expected = (
            "    const args = {\n"
            "      ...((body ?? {}) as Record<string, unknown>),\n"
            "      bookingId: requireParam(path.id, 'id'),\n"
            "    };\n"
            "    const result: Types.Booking = await kalendisClient.updateBooking(\n"
            "      args as Parameters<KalendisClient['updateBooking']>[0]\n"
            "    );\n"
        )
        assert expected in self.source

    def test_query_extraction(self):
        assert "      userId: requireParam(query.userId, 'userId'),\n" in self.source
        assert "      end: optionalParam(query.end),\n" in self.source

    def test_no_args_call(self):
        assert "const result: Types.Account = await kalendisClient.getAccount();" in self.source

    def test_statuses(self):
        assert "res.status(201).json(result);" in self.source
        assert "res.status(200).json(result);" in self.source
        assert "res.status(500).json({ error: errorMessage(error) });" in self.source

    def test_unused_coercions_omitted(self):
        assert "function requireParam(" in self.source
        assert "function toNumber(" not in self.source
        assert "function toBoolean(" not in self.source

    def test_deterministic(self):
        assert generate_express_routes() == self.source


class TestFastifyRoutes:
    """Test the Fastify plugin module."""

    @classmethod
    def setup_class(cls):
        cls.catalog = load_catalog()
        cls.source = generate_fastify_routes()

    def test_plugin(self):
        assert "export default async function kalendisRoutes(fastify: FastifyInstance) {" in self.source

    def test_every_operation_once(self):
        for name in self.catalog:
            assert self.source.count(f"kalendisClient.{name}(") == 1, name

    def test_route_registration(self):
        assert "  fastify.delete('/api/users/:id', async (request: FastifyRequest, reply: FastifyReply) => {" in self.source

    def test_statuses(self):
        assert "return reply.code(201).send(result);" in self.source
        assert "return reply.code(500).send({ error: errorMessage(error) });" in self.source

    def test_call_indented(self):
        assert "      const result: Types.Account = await kalendisClient.getAccount();\n" in self.source


class TestNextjsRoutes:
    """Test the Next.js app-router files."""

    @classmethod
    def setup_class(cls):
        cls.catalog = load_catalog()
        cls.files = generate_nextjs_routes()

    def test_one_file_per_route(self):
        routes = {e.route for e in self.catalog.values()}
        assert len(self.files) == len(routes)

    def test_file_paths(self):
        assert "app/api/users/route.ts" in self.files
        assert "app/api/users/[id]/route.ts" in self.files
        assert "app/api/bookings/bulk/route.ts" in self.files
        assert all(path.startswith("app/api/") and path.endswith("/route.ts") for path in self.files)

    def test_file_order(self):
        assert next(iter(self.files)) == "app/api/users/route.ts"

    def test_verbs_exported(self):
        users = self.files["app/api/users/route.ts"]
        assert "export async function GET(request: NextRequest, context: RouteContext) {" in users
        assert "export async function POST(request: NextRequest, context: RouteContext) {" in users
        assert "NextResponse.json(result, { status: 201 })" in users

    def test_dynamic_segment(self):
        source = self.files["app/api/availability/[id]/route.ts"]
        assert "const path = await context.params;" in source
        assert "availabilityId: requireParam(path.id, 'id')," in source
        assert "export async function PUT(" in source
        assert "export async function DELETE(" in source

    def test_query(self):
        source = self.files["app/api/bookings/route.ts"]
        assert "Object.fromEntries(request.nextUrl.searchParams)" in source
        assert "const body = await request.json();" in source

    def test_default_types_path(self):
        for source in self.files.values():
            assert "import type * as Types from '@/lib/types';" in source

    def test_error_status(self):
        for source in self.files.values():
            assert "NextResponse.json({ error: errorMessage(error) }, { status: 500 })" in source

    def test_every_operation_once(self):
        joined = "\n".join(self.files.values())
        for name in self.catalog:
            assert joined.count(f"kalendisClient.{name}(") == 1, name


class TestNestjsModule:
    """Test the NestJS controller/service/module triad."""

    @classmethod
    def setup_class(cls):
        cls.catalog = load_catalog()
        cls.files = generate_nestjs_module()
        cls.controller, cls.service, cls.module = (cls.files[name] for name in NESTJS_FILES)

    def test_exactly_three_files(self):
        assert list(self.files) == [
            "kalendis.controller.ts",
            "kalendis.service.ts",
            "kalendis.module.ts",
        ]

    def test_controller(self):
        assert "@Controller('api')" in self.controller
        assert "import { KalendisService } from './kalendis.service';" in self.controller
        assert "constructor(private readonly kalendisService: KalendisService) {}" in self.controller
        assert "import type * as Types from '@/types';" in self.controller

    def test_controller_handlers(self):
        assert "  @Get('users')\n  @HttpCode(200)\n  async getUsersByAccountId() {" in self.controller
        assert "  @Post('bookings')\n  @HttpCode(201)\n  async addBooking(@Body() body: Record<string, unknown>) {" in self.controller
        assert (
            "  async updateBooking(@Param() path: Record<string, string | undefined>, "
            "@Body() body: Record<string, unknown>) {"
        ) in self.controller
        assert (
            "  async getBooking(@Query() query: Record<string, string | string[] | undefined>) {"
        ) in self.controller

    def test_controller_errors(self):
        assert "throw new HttpException({ error: errorMessage(error) }, 500);" in self.controller

    def test_controller_calls_service(self):
        for name in self.catalog:
            assert f"await this.kalendisService.{name}(" in self.controller, name

    def test_service(self):
        assert "@Injectable()" in self.service
        assert "apiKey: process.env.KALENDIS_API_KEY!" in self.service
        assert "  async getAccount(...args: Parameters<KalendisClient['getAccount']>) {" in self.service
        for name in self.catalog:
            assert f"this.kalendisClient.{name}(...args)" in self.service, name

    def test_module(self):
        assert "controllers: [KalendisController]" in self.module
        assert "providers: [KalendisService]" in self.module
        assert "export class KalendisModule {}" in self.module
        assert "import { KalendisController } from './kalendis.controller';" in self.module
        assert "import { KalendisService } from './kalendis.service';" in self.module

    def test_custom_types_path(self):
        files = generate_nestjs_module(types_import_path="../types")
        assert "import type * as Types from '../types';" in files["kalendis.controller.ts"]
